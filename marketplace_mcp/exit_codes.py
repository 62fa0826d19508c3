"""
Standard exit codes for marketplace-mcp commands.

Following Unix/POSIX conventions for command-line tools.
"""

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (click's own usage errors)

# Application-specific exit codes (64-113 are typically available)
CONFIG_ERROR = 66        # up CLI configuration missing or unreadable
NETWORK_ERROR = 68       # Could not bind the HTTP transport
AUTH_ERROR = 69          # Marketplace rejected the session
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Checked along the exception's MRO, so subclasses inherit a mapping
# (ConnectionRefusedError -> OSError, CredentialError before MarketplaceError)
EXCEPTION_EXIT_CODES = {
    'CredentialError': CONFIG_ERROR,
    'InvalidBaseURLError': CONFIG_ERROR,
    'AuthenticationRequiredError': AUTH_ERROR,
    'FileNotFoundError': CONFIG_ERROR,
    'OSError': NETWORK_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: BaseException) -> int:
    """
    Get the appropriate exit code for an exception.

    Args:
        exc: The exception that occurred

    Returns:
        Exit code of the most specific mapped class, else GENERAL_ERROR
    """
    for cls in type(exc).__mro__:
        if cls.__name__ in EXCEPTION_EXIT_CODES:
            return EXCEPTION_EXIT_CODES[cls.__name__]
    return GENERAL_ERROR
