# =============================================================================
# WEATHER OBSERVER - TEST SUITE
# =============================================================================
#
# Layout:
#   tests/
#     unit/           - Unit Tests (providers, service, runner, config, logging)
#     e2e/            - End-to-End Tests (stubbed providers, CLI)
#
# Usage:
#   pytest tests/
#   pytest tests/unit/
#
# No test touches the network: HTTP is stubbed at the requests.Session seam.
#
# =============================================================================
