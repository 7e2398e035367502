"""Exceptions raised for invalid command-line input."""


class ArgumentError(ValueError):
    """A flag combination or flag value that the command cannot accept.

    The CLI reports it together with the subcommand's help text.
    """
