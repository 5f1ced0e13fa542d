"""Listing of the image folder tree.

The images root holds one level of folders, each holding image files:

    images/
        kitchens/1.png
        bathrooms/2.jpg

Only that two-level layout is reported; deeper folders are not walked.
"""

from pathlib import Path

from loguru import logger

from src.core.exceptions import InternalError
from src.infrastructure.constants import IMAGES_URL_PREFIX

type ImageListing = dict[str, list[dict[str, str]]]


def list_image_directories(
    root: Path, url_prefix: str = IMAGES_URL_PREFIX
) -> ImageListing:
    """Map each folder under ``root`` to its files and their public URLs.

    Args:
        root: Directory containing the image folders.
        url_prefix: URL path the root is served under.

    Returns:
        ImageListing: ``{folder: [{"name": file, "url": url}]}`` with folders
            and files sorted by name.

    Raises:
        InternalError: If the root or any folder cannot be read.
    """
    listing: ImageListing = {}
    try:
        folders = sorted(
            (entry for entry in root.iterdir() if entry.is_dir()),
            key=lambda entry: entry.name,
        )
        for folder in folders:
            files = sorted(entry.name for entry in folder.iterdir() if entry.is_file())
            listing[folder.name] = [
                {"name": name, "url": f"{url_prefix}/{folder.name}/{name}"}
                for name in files
            ]
    except OSError as e:
        logger.error("Failed to read image directories under {}: {}", root, e)
        msg = "Failed to read image directories"
        raise InternalError(msg, context={"root": str(root)}, cause=e) from e

    return listing
