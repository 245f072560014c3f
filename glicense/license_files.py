"""Write captured license texts to disk."""

import base64
import binascii
from pathlib import Path
from typing import List, Sequence, Union

from ._resolution.models import Repository
from .exceptions import FileProcessingError
from .logging_config import logger

LICENSES_DIR = "licenses"


def license_file_name(repository: Repository) -> str:
    """File name for a repository's license text."""
    return f"{repository.author}-{repository.project}-license.MD"


def write_license_files(repositories: Sequence[Repository], path: Union[str, Path]) -> List[Path]:
    """
    Decode and write every captured license text.

    Files go to ``<path>/licenses/<author>-<project>-license.MD``.
    Repositories without license text are skipped.

    Args:
        repositories: Enriched repositories
        path: Project directory

    Returns:
        Paths of the files written

    Raises:
        FileProcessingError: On the first decode or write failure
    """
    with_text = [r for r in repositories if r.text]
    if not with_text:
        return []

    target_dir = Path(path) / LICENSES_DIR
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileProcessingError(f"Cannot create {target_dir}: {e}")

    written: List[Path] = []
    for repo in with_text:
        try:
            # GitHub wraps the encoded content at 60 columns
            content = base64.b64decode("".join(repo.text.split()), validate=True)
        except (binascii.Error, ValueError) as e:
            raise FileProcessingError(f"Cannot decode license text of {repo.name}: {e}")

        target = target_dir / license_file_name(repo)
        try:
            target.write_bytes(content)
        except OSError as e:
            raise FileProcessingError(f"Cannot write {target}: {e}")

        logger.debug(f"Wrote license text for {repo.name} to {target}")
        written.append(target)

    return written
