# dbscan_oracle/verification/oracle_version.py
# Oracle version constants. Single authoritative definition.
# Referenced by run_oracle.py and failure_handler.py for version stamping.

ORACLE_VERSION: str = "1.0.0"

# Version of the scenario matrix in scenarios/scenario_definitions.py.
SCENARIO_MATRIX_VERSION: str = "1.0.0"

# Layout version of the PASS / FAIL JSON records.
RECORD_FORMAT_VERSION: str = "1.0.0"
