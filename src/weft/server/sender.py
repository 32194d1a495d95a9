"""Response rendering — writes a weft Response onto a ResponseWriter.

Headers first, then the status line, then the body in chunks. A failure
while copying the body can only be signalled as a best-effort 500: the
status line is already committed, so the writer logs and ignores it.
"""

import io
import logging
from typing import IO

import anyio
import anyio.to_thread
from anyio.abc import ByteReceiveStream

from weft.config import ActionConfig
from weft.http.response import Response
from weft.http.writer import ResponseWriter

logger = logging.getLogger("weft.server")

# Errors that mean the body source broke mid-copy
_COPY_ERRORS = (OSError, anyio.BrokenResourceError, anyio.ClosedResourceError)


async def send_empty(writer: ResponseWriter) -> None:
    """The handler returned nothing: 200, no headers, no body."""
    await writer.write_header(200)
    await writer.finish()


async def send_response(response: Response, writer: ResponseWriter, config: ActionConfig) -> None:
    """Apply headers, commit the status, then stream the body."""
    if response.content_type:
        writer.headers["Content-Type"] = response.content_type
    # Applied after the content type: a colliding Content-Type here wins.
    if response.headers:
        for name, value in response.headers.items():
            writer.headers[name] = value

    await writer.write_header(response.status)

    try:
        await _copy_body(response, writer, config)
    except _COPY_ERRORS:
        logger.exception("failed to copy response body (status %d)", response.status)
        await writer.write_header(500)

    await writer.finish()


async def _copy_body(response: Response, writer: ResponseWriter, config: ActionConfig) -> None:
    content = response.content
    if isinstance(content, ByteReceiveStream):
        await _copy_stream(content, writer, config)
        return
    await _copy_reader(content, writer, config)


async def _copy_stream(stream: ByteReceiveStream, writer: ResponseWriter, config: ActionConfig) -> None:
    async with stream:
        while True:
            try:
                chunk = await stream.receive(config.chunk_size)
            except anyio.EndOfStream:
                break
            await writer.write(chunk)


async def _copy_reader(reader: IO[bytes], writer: ResponseWriter, config: ActionConfig) -> None:
    offload = config.offload_reads and not isinstance(reader, io.BytesIO)
    try:
        while True:
            if offload:
                chunk = await anyio.to_thread.run_sync(reader.read, config.chunk_size)
            else:
                chunk = reader.read(config.chunk_size)
            if not chunk:
                break
            await writer.write(chunk)
    finally:
        reader.close()
