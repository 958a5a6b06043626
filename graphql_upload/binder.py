"""
Binds uploaded files to GraphQL operation variables
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from asgiref.sync import sync_to_async
from django.core.files.uploadedfile import UploadedFile

from .conf import UploadPolicy
from .exceptions import ConflictingVariable, DisallowedType, InvalidFile, MissingFile, PayloadTooLarge
from .mime import resolve_mime_type
from .upload import ResolvedFile, Upload
from .validators import UploadValidator


logger = logging.getLogger(__name__)

FILE_ENCODING = 'binary'


@dataclass
class FileBinding:
    """One uploaded file and the variables it is bound to"""
    file_key: str
    file: UploadedFile
    variable_names: List[str]


def variable_name_for(path: str) -> str:
    """
    Top-level variable name for a dotted map path.

    Only the last segment is used: "variables.file" -> "file".
    Nested paths such as "variables.input.files.0" are flattened to "0".
    """
    return path.split('.')[-1]


def plan_bindings(
    path_map: Dict[str, List[str]],
    files: Dict[str, UploadedFile],
    policy: UploadPolicy,
) -> List[FileBinding]:
    """
    Match every map entry to its uploaded file before any content is read

    Raises:
        MissingFile: a map entry has no uploaded file
        PayloadTooLarge: a file is larger than the policy allows
        ConflictingVariable: two map entries target the same variable
    """
    bindings = []
    owners: Dict[str, str] = {}

    for file_key, paths in path_map.items():
        file = files.get(file_key)
        if file is None:
            raise MissingFile(f"No file was uploaded for map entry '{file_key}'")

        is_valid, error_message = UploadValidator.validate_file_size(file, policy)
        if not is_valid:
            raise PayloadTooLarge(error_message)

        variable_names = []
        for path in paths:
            name = variable_name_for(path)
            owner = owners.setdefault(name, file_key)
            if owner != file_key:
                raise ConflictingVariable(
                    f"Map entries '{owner}' and '{file_key}' both target variable '{name}'"
                )
            if name not in variable_names:
                variable_names.append(name)

        bindings.append(FileBinding(file_key=file_key, file=file, variable_names=variable_names))

    return bindings


def _read_file(file: UploadedFile) -> bytes:
    # chunks() rewinds the file first
    return b''.join(file.chunks())


async def bind_file(binding: FileBinding, variables: Dict[str, Any], policy: UploadPolicy) -> Upload:
    """
    Buffer, sniff and validate one file, then bind it to its variables

    Raises:
        InvalidFile: the file part has no name, size or content type
        DisallowedType: the effective MIME type is not allowed
    """
    file = binding.file

    is_valid, error_message = UploadValidator.validate_file_properties(file)
    if not is_valid:
        raise InvalidFile(error_message)

    buffer = await sync_to_async(_read_file)(file)
    mime_type = resolve_mime_type(buffer, file.content_type)

    is_valid, error_message = UploadValidator.validate_mime_type(mime_type, policy)
    if not is_valid:
        raise DisallowedType(error_message)

    upload = Upload()
    upload.resolve(ResolvedFile(
        file_name=file.name,
        file_size=file.size,
        mime_type=mime_type,
        encoding=FILE_ENCODING,
        content=buffer,
    ))

    for name in binding.variable_names:
        variables[name] = upload

    logger.debug(
        "Bound %s (%s, %d bytes) to %s",
        file.name, mime_type, file.size, ', '.join(binding.variable_names),
    )
    return upload


async def bind_uploads(
    bindings: List[FileBinding],
    variables: Dict[str, Any],
    policy: UploadPolicy,
) -> List[Upload]:
    """
    Bind all files concurrently; the first failure is raised
    """
    return await asyncio.gather(*(bind_file(binding, variables, policy) for binding in bindings))


def remove_unset_variables(variables: Dict[str, Any]) -> None:
    """Delete variables left falsy, e.g. optional uploads that were not sent"""
    for key in [key for key, value in variables.items() if not value]:
        del variables[key]
