"""Protocol-level exceptions.

Transport failures are raised by :mod:`tytable.transport` and pass through
the protocol layer unchanged; the classes here describe problems the
protocol layer detects on its own.
"""


class ProtocolError(Exception):
    """Base class for all protocol-layer errors."""


class InvalidArgument(ProtocolError, ValueError):
    """A builder or facade call received an argument outside its domain."""


class DecodeError(ProtocolError):
    """ A wire blob expected to hold a record could not be parsed. The
        *reason* is one of the class-level reason strings; the *tokens*
        that were recovered before the failure are kept for inspection.
    """

    ODD_TOKEN_COUNT = 'OddTokenCount'
    DUPLICATE_COLUMN = 'DuplicateColumn'

    def __init__(self, reason, tokens=None, detail=None):

        self.reason = reason
        self.tokens = tokens
        self.detail = detail

        text = reason
        if detail is not None:
            text = '%s: %s' % (reason, detail)

        ProtocolError.__init__(self, text)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
