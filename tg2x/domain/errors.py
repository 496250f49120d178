"""Relay error taxonomy.

None of these ever escape RelayEngine.relay(); each is converted into a
log line (and for SubmitError, an operator notification) at the step that
raised it.
"""


class RelayError(Exception):
    """Base class for relay collaborator failures"""
    pass


class FetchError(RelayError):
    """Attachment bytes could not be retrieved from the channel"""
    pass


class UploadError(RelayError):
    """Media upload to the target platform failed"""
    pass


class SubmitError(RelayError):
    """Post submission failed"""
    pass


class NotifyError(RelayError):
    """Operator notification could not be delivered"""
    pass
