from __future__ import annotations

from dataclasses import dataclass

from .exit_codes import ERR_INTERNAL

KIND_CONFIG_NOT_FOUND = "config_not_found"
KIND_CONFIG_PARSE_ERROR = "config_parse_error"
KIND_COMMAND_TIMEOUT = "command_timeout"
KIND_COMMAND_KILLED = "command_killed"
KIND_COMMAND_NONZERO_EXIT = "command_nonzero_exit"
KIND_COMMAND_INVOCATION_ERROR = "command_invocation_error"
KIND_OUTPUT_WRITE_FAILURE = "output_write_failure"


@dataclass
class TruthError(Exception):
    message: str
    code: int = ERR_INTERNAL
    kind: str = "generic_error"

    def __str__(self) -> str:
        return self.message
