"""
GraphQL Mutations for file uploads
"""
import logging

import strawberry
from asgiref.sync import sync_to_async
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from strawberry.types import Info

from graphql_upload.upload import GraphQLUpload
from files.graphql.types import FileType


logger = logging.getLogger(__name__)


def _store(file_name, content):
    stored_name = default_storage.save(file_name, ContentFile(content, name=file_name))
    return stored_name, default_storage.url(stored_name)


@strawberry.type
class FileMutation:
    """File-related mutations"""

    @strawberry.mutation
    async def upload_file(self, info: Info, file: GraphQLUpload) -> FileType:
        """
        Store an uploaded file in the default storage
        """
        upload = await file

        try:
            stored_name, uri = await sync_to_async(_store)(
                upload.file_name,
                upload.create_read_stream().read(),
            )
        except OSError as e:
            logger.error("Error storing upload %s: %s", upload.file_name, e)
            raise Exception("Failed to handle file upload.") from e

        logger.info("%s successfully uploaded %s", info.context.ip, stored_name)

        return FileType(
            encoding=upload.encoding,
            file_name=upload.file_name,
            file_size=upload.file_size,
            mime_type=upload.mime_type,
            uri=uri,
        )
