"""Semantic exit codes of the todotxt command.

Scripts can branch on these instead of parsing error output.
"""

SUCCESS = 0

# Unspecified failure
ERROR_GENERAL = 1

# Bad arguments, invalid dates or priorities, unparsable input
ERROR_INVALID_ARGS = 2

# AI service unreachable or returned an error
ERROR_NETWORK = 4

# Task index, preset or config key does not exist
ERROR_NOT_FOUND = 5

_NAMES = {
    SUCCESS: "SUCCESS",
    ERROR_GENERAL: "ERROR_GENERAL",
    ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
    ERROR_NETWORK: "ERROR_NETWORK",
    ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
}


def get_exit_code_name(code: int) -> str:
    return _NAMES.get(code, f"UNKNOWN({code})")
