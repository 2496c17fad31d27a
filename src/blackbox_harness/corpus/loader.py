"""
Module: corpus.loader

Purpose:
    Load the fixtures of one corpus directory. Every image whose suffix is
    in the allow-list is paired with the text file that shares its base
    name. The whole corpus is paired and every image verified before any
    decoding starts, so a missing text file or a corrupt image aborts the
    run with no partial tallies.

Key Functions:
    - resolve_corpus_dir(): Locate the corpus, trying alternate roots
    - discover_image_files(): Allow-listed images, sorted by name
    - expected_text_path(): Text file paired with an image
    - read_expected_text(): Exact UTF-8 contents of a text file
    - load_fixtures(): Full corpus scan
    - fixtures_from_manifest(): Explicit path -> text pairing
    - verify_fixture_images(): Reject unreadable images before decoding

Dependencies:
    - pathlib (std)
    - blackbox_harness.core.models: FixtureImage

Used By:
    - runner.suite: Corpus scan at the start of every run
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Tuple, Union

from blackbox_harness.config import HarnessConfig
from blackbox_harness.core.models import FixtureImage
from blackbox_harness.errors import (
    ExpectedTextError,
    MissingExpectedTextError,
    MissingFixtureDirectoryError,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def resolve_corpus_dir(
    path: PathLike,
    config: Optional[HarnessConfig] = None,
) -> Path:
    """
    Locate a corpus directory.

    Corpus paths are usually written relative to a sub-project, so when the
    path does not exist each configured alternate root is tried as a prefix
    (``core/<path>`` by default).

    Args:
        path: Corpus directory as configured on the suite
        config: Harness configuration (alternate roots)

    Returns:
        Existing directory

    Raises:
        MissingFixtureDirectoryError: If no candidate is a directory

    Example:
        >>> resolve_corpus_dir("test/data/blackbox/qrcode-1")
        PosixPath('core/test/data/blackbox/qrcode-1')
    """
    config = config or HarnessConfig()
    base = Path(path)
    candidates = [base]
    if not base.is_absolute():
        candidates.extend(Path(root) / base for root in config.alternate_roots)

    for candidate in candidates:
        if candidate.is_dir():
            if candidate != base:
                logger.debug(f"Corpus {base} resolved to {candidate}")
            return candidate

    tried = ", ".join(str(c) for c in candidates)
    raise MissingFixtureDirectoryError(
        f"Corpus directory not found: {base} (tried {tried}). "
        f"Run from the project root or the directory containing it."
    )


def discover_image_files(
    directory: Path,
    config: Optional[HarnessConfig] = None,
) -> List[Path]:
    """
    List fixture images in a directory.

    Matching is a case-insensitive suffix check against the configured
    allow-list (jpg, jpeg, gif, png). Sub-directories are not searched.

    Returns:
        Image paths sorted by file name
    """
    config = config or HarnessConfig()
    images = [
        p for p in directory.iterdir()
        if p.is_file() and p.suffix.lower() in config.image_extensions
    ]
    images.sort(key=lambda p: p.name)
    return images


def expected_text_path(
    image_path: Path,
    config: Optional[HarnessConfig] = None,
) -> Path:
    """
    Path of the text file paired with an image.

    The base name runs up to the first dot of the file name, so rotated or
    annotated copies such as ``12.rot90.png`` share ``12.txt``.

    Example:
        >>> expected_text_path(Path("corpus/12.rot90.png"))
        PosixPath('corpus/12.txt')
    """
    config = config or HarnessConfig()
    stem = image_path.name.split(".", 1)[0]
    return image_path.with_name(stem + config.expected_text_suffix)


def read_expected_text(
    path: Path,
    config: Optional[HarnessConfig] = None,
) -> str:
    """
    Read expected text exactly as stored.

    Bytes are decoded without newline translation or trimming; a trailing
    newline in the file is part of the expected text.

    Raises:
        MissingExpectedTextError: If the file does not exist
        ExpectedTextError: If the bytes are not valid in the configured encoding
    """
    config = config or HarnessConfig()
    if not path.is_file():
        raise MissingExpectedTextError(f"Missing expected text file: {path}")
    try:
        return path.read_bytes().decode(config.text_encoding)
    except UnicodeDecodeError as e:
        raise ExpectedTextError(
            f"Expected text file is not valid {config.text_encoding}: {path} ({e})"
        ) from e


def load_fixtures(
    directory: PathLike,
    config: Optional[HarnessConfig] = None,
) -> Tuple[FixtureImage, ...]:
    """
    Scan a corpus and pair every image with its expected text.

    Args:
        directory: Corpus directory (alternate roots are tried)
        config: Harness configuration

    Returns:
        Fixtures in file-name order

    Raises:
        MissingFixtureDirectoryError: If the corpus cannot be located
        MissingExpectedTextError: If any image lacks its text file
        ExpectedTextError: If a text file cannot be decoded
        FixtureImageError: If any image cannot be read
    """
    config = config or HarnessConfig()
    corpus = resolve_corpus_dir(directory, config)

    fixtures = []
    for image_path in discover_image_files(corpus, config):
        text = read_expected_text(expected_text_path(image_path, config), config)
        fixtures.append(FixtureImage(path=image_path, expected_text=text))
    verify_fixture_images(fixtures)

    if not fixtures:
        logger.warning(f"No fixture images found in {corpus}")
    else:
        logger.debug(f"Loaded {len(fixtures)} fixtures from {corpus}")
    return tuple(fixtures)


def fixtures_from_manifest(manifest: Mapping[PathLike, str]) -> Tuple[FixtureImage, ...]:
    """
    Build fixtures from an explicit image -> expected text mapping.

    Decouples pairing from file naming. Image files are not opened here;
    pass the result to verify_fixture_images() before decoding.

    Returns:
        Fixtures sorted by path
    """
    fixtures = [
        FixtureImage(path=Path(image), expected_text=text)
        for image, text in manifest.items()
    ]
    fixtures.sort(key=lambda f: str(f.path))
    return tuple(fixtures)


def verify_fixture_images(fixtures: Sequence[FixtureImage]) -> None:
    """
    Check every fixture image can be opened, without decoding pixels.

    Raises:
        FixtureImageError: For the first image that is missing or corrupt
    """
    for fixture in fixtures:
        fixture.verify()
