"""Generate command - enrich one record with a generated passport photo."""

import asyncio
import base64
import sys
from pathlib import Path

import cyclopts

from permitgen.cli.console import Console, get_console
from permitgen.cli.session import load_file, open_session, record_index
from permitgen.domain.identity.command.generate import GeneratePhoto, GeneratePhotoHandler
from permitgen.domain.identity.model.store import RecordStore
from permitgen.domain.identity.model.value import GenerationStatus
from permitgen.domain.shared.error import PermitGenError
from permitgen.util.di.scope import Scope

app = cyclopts.App(name="generate", help="Generate a passport photo for one record")


def photo_bytes(photo_url: str) -> bytes:
    """Decode the payload of a ``data:...;base64,`` photo URI."""
    _, _, payload = photo_url.partition(",")
    return base64.b64decode(payload)


def photo_extension(photo_url: str) -> str:
    """File extension for the MIME type of a ``data:<mime>;base64,`` URI, ``png`` if absent."""
    header, _, _ = photo_url.partition(",")
    mime = header.removeprefix("data:").split(";", 1)[0]
    _, _, subtype = mime.partition("/")
    return subtype or "png"


@app.default
def generate(
    path: Path,
    /,
    *,
    index: int = 1,
    photo_out: Path | None = None,
) -> None:
    """Generate a photo for one record and optionally save it.

    Args:
        path: Spreadsheet (.xlsx or .csv) with one person per row.
        index: Record number (1-based, as listed by show) to generate a photo for.
        photo_out: Where to write the generated image. Without a suffix, one
            matching the image type is added (".png" unless the service
            reports another type).
    """
    console = get_console()
    try:
        ok = asyncio.run(_generate(path, index, photo_out, console))
    except OSError as e:
        console.error(f"Cannot access file: {e.strerror or e}")
        sys.exit(1)
    except PermitGenError as e:
        console.error(e.message)
        sys.exit(1)
    if not ok:
        sys.exit(1)


async def _generate(path: Path, number: int, photo_out: Path | None, console: Console) -> bool:
    async with open_session() as container:
        await load_file(container, path)
        store = await container.get(RecordStore)
        index = record_index(store, number)
        record = store.get(index)

        async with container(scope=Scope.UOW) as scope:
            handler = await scope.get(GeneratePhotoHandler)
            with console.status(f"Generating image for {record.full_name}..."):
                result = await handler.run(GeneratePhoto(index=index))

        console.outcome(result.outcome)
        if result.outcome.status != GenerationStatus.COMPLETED:
            return False

        photo_url = store.get(index).photo_url
        if photo_out is not None and photo_url is not None:
            if not photo_out.suffix:
                photo_out = photo_out.with_suffix(f".{photo_extension(photo_url)}")
            photo_out.parent.mkdir(parents=True, exist_ok=True)
            photo_out.write_bytes(photo_bytes(photo_url))
            console.info(f"Photo written to {photo_out}")
        return True
