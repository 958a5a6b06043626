"""
Errors raised while processing a GraphQL multipart upload request
"""


class UploadError(Exception):
    """Base class for all upload processing errors"""


class MalformedEnvelope(UploadError):
    """The 'operations' or 'map' field is missing or is not a JSON object"""


class MissingFile(UploadError):
    """A field named in 'map' has no uploaded file part"""


class InvalidFile(UploadError):
    """An uploaded file is missing its name, size or declared type"""


class PayloadTooLarge(UploadError):
    """A file exceeds the configured maximum size"""


class DisallowedType(UploadError):
    """A file's effective MIME type is not in the allow-list"""


class ConflictingVariable(UploadError):
    """Two map entries bind files to the same variable"""


class ExecutionFailure(UploadError):
    """The GraphQL execution engine raised while running the operation"""
