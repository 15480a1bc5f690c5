"""
Upload contracts.

A FileUploadRequest describes one PUT of a release file (zip archive,
SHA256SUMS or its signature) to a pre-signed URL handed out by the registry.
The destination already carries its own authorization.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Union

BINARY_OCTET_STREAM = "binary/octet-stream"

FileContent = Union[bytes, bytearray, memoryview, BinaryIO]


@dataclass
class FileUploadRequest:
    destination: str
    file: FileContent
    filename: str
    content_type: str = BINARY_OCTET_STREAM


__all__ = ["BINARY_OCTET_STREAM", "FileContent", "FileUploadRequest"]
