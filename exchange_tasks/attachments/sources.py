"""Resolve send-side attachment descriptors to files on disk."""

import shutil
import tempfile
from pathlib import Path

from exchange_tasks.errors import AttachmentNotFoundError
from exchange_tasks.models.send import AttachmentSource, AttachmentType
from exchange_tasks.utils.logger import get_logger

logger = get_logger("exchange_tasks.attachments.sources")


class TempFileTracker:
    """Temp files created for string attachments during one send; removed afterwards."""

    def __init__(self) -> None:
        self._paths: list[Path] = []

    @property
    def paths(self) -> list[Path]:
        return list(self._paths)

    def create(self, file_name: str, content: str) -> Path:
        """Write content to file_name inside a fresh temporary directory."""
        work_dir = Path(tempfile.mkdtemp(prefix="exchange-tasks-"))
        path = work_dir / Path(file_name).name
        path.write_text(content, encoding="utf-8")
        self._paths.append(path)
        logger.debug("attachments.sources.temp_file_created", path=str(path))
        return path

    def cleanup(self) -> None:
        """Delete tracked files and their directories. Failures are logged, not raised."""
        for path in self._paths:
            try:
                if path.exists():
                    path.unlink()
                shutil.rmtree(path.parent, ignore_errors=True)
            except OSError as e:
                logger.warning("attachments.sources.cleanup_failed", path=str(path), error=str(e))
        self._paths.clear()


def files_for_source(source: AttachmentSource) -> list[Path]:
    """A single file, or every file in a directory matching file_mask (sorted).

    A blank file_path matches nothing; Path("") would be the working directory.
    """
    if not (source.file_path or "").strip():
        return []
    path = Path(source.file_path)
    if path.is_file():
        return [path]
    if path.is_dir():
        return sorted(p for p in path.glob(source.file_mask or "*") if p.is_file())
    return []


def resolve_attachment_files(
    sources: list[AttachmentSource],
    throw_if_not_found: bool,
    tracker: TempFileTracker,
) -> list[Path]:
    """Turn attachment descriptors into the list of files to attach.

    A file source matching nothing raises AttachmentNotFoundError when
    throw_if_not_found is set; otherwise it is left out of the message.
    """
    files: list[Path] = []
    for source in sources:
        if source.attachment_type == AttachmentType.AttachmentFromString:
            files.append(tracker.create(source.file_name or "", source.file_content or ""))
            continue

        matched = files_for_source(source)
        if not matched:
            if throw_if_not_found:
                raise AttachmentNotFoundError(
                    f"No files found in {source.file_path} matching {source.file_mask}."
                )
            logger.warning(
                "attachments.sources.not_found",
                file_path=source.file_path,
                file_mask=source.file_mask,
            )
            continue
        files.extend(matched)
    logger.debug("attachments.sources.resolved", count=len(files))
    return files
