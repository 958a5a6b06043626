"""
GraphQL types for file uploads
"""
import strawberry


@strawberry.type
class FileType:
    """A stored upload"""
    encoding: str
    file_name: str
    file_size: int
    mime_type: str
    uri: str
