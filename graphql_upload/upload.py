"""
Upload handle, resolved file and the Upload GraphQL scalar
"""
import asyncio
import io
from dataclasses import dataclass, field
from typing import Any, NewType, Optional

import strawberry
from graphql import GraphQLError


@dataclass(frozen=True)
class ResolvedFile:
    """
    A fully buffered uploaded file.

    create_read_stream() returns a new stream positioned at the start of the
    content on every call, so resolvers may read the file more than once.
    """
    file_name: str
    file_size: int
    mime_type: str
    encoding: str
    content: bytes = field(repr=False)

    def create_read_stream(self) -> io.BytesIO:
        return io.BytesIO(self.content)


class Upload:
    """
    Single-assignment placeholder bound into GraphQL variables for a file.

    Resolvers receive the handle through the Upload scalar and ``await`` it
    to get the ResolvedFile.
    """

    def __init__(self):
        self.file: Optional[ResolvedFile] = None
        self.future: asyncio.Future = asyncio.get_running_loop().create_future()
        # Mark rejections as retrieved when nobody awaits the handle
        self.future.add_done_callback(_consume_exception)

    def resolve(self, file: ResolvedFile) -> None:
        if self.future.done():
            raise RuntimeError("Upload has already been settled")
        self.file = file
        self.future.set_result(file)

    def reject(self, reason: BaseException) -> None:
        if self.future.done():
            raise RuntimeError("Upload has already been settled")
        self.future.set_exception(reason)

    @property
    def resolved(self) -> bool:
        return self.future.done() and not self.future.cancelled() and self.future.exception() is None

    def __await__(self):
        return self.future.__await__()

    def __repr__(self):
        state = 'resolved' if self.resolved else ('rejected' if self.future.done() else 'pending')
        return f"<Upload {state} file={self.file!r}>"


def _consume_exception(future: asyncio.Future) -> None:
    if not future.cancelled():
        future.exception()


def _parse_value(value: Any) -> Upload:
    if isinstance(value, Upload):
        return value
    raise GraphQLError("Upload value invalid.")


def _parse_literal(node, _variables=None):
    raise GraphQLError("Upload literal unsupported.", nodes=node)


def _serialize(value: Any):
    raise GraphQLError("Upload serialization unsupported.")


# Annotation type for Upload arguments; schemas register it via UPLOAD_SCALAR_MAP
GraphQLUpload = NewType('Upload', object)

UploadScalar = strawberry.scalar(
    name='Upload',
    description='The Upload scalar type represents a file upload.',
    serialize=_serialize,
    parse_value=_parse_value,
    parse_literal=_parse_literal,
)

UPLOAD_SCALAR_MAP = {GraphQLUpload: UploadScalar}
