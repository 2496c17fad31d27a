import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import blackbox_harness
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from blackbox_harness.decoding import BarcodeFormat, DecodeHintType, NotFoundError, Result


# Gray level of each fixture image -> expected text. Luminance of an RGB
# gray pixel (g, g, g) is exactly g, and 90-degree rotations are exact
# transposes, so a reader can identify a fixture from any pixel.
CORPUS = {
    "1": (40, "Text 1"),
    "2": (80, "Text 2"),
    "3": (120, "Text 3"),
}

# Landscape fixtures: width > height at 0 degrees, portrait at 90
FIXTURE_SIZE = (40, 20)


class ScriptedReader:
    """
    Fake reader that recognises fixtures by gray level.

    ``fail`` decides per attempt whether to raise NotFoundError; it receives
    (gray, landscape, try_harder). ``overrides`` swaps in another result for
    a gray level.
    """

    def __init__(self, answers, fmt=BarcodeFormat.QR_CODE, fail=None, overrides=None):
        self.answers = dict(answers)
        self.format = fmt
        self.fail = fail or (lambda gray, landscape, try_harder: False)
        self.overrides = dict(overrides or {})
        self.calls = []

    def decode(self, bitmap, hints=None):
        gray = int(bitmap.luminance[0, 0])
        landscape = bitmap.width >= bitmap.height
        try_harder = bool(hints and hints.get(DecodeHintType.TRY_HARDER))
        self.calls.append((gray, landscape, try_harder, hints))
        if self.fail(gray, landscape, try_harder):
            raise NotFoundError("no barcode")
        if gray in self.overrides:
            return self.overrides[gray]
        return Result(text=self.answers[gray], format=self.format)


def write_corpus(directory: Path, entries=None, *, ext=".png", size=FIXTURE_SIZE):
    """Write gray images with sibling .txt files; returns the directory."""
    directory.mkdir(parents=True, exist_ok=True)
    for stem, (gray, text) in (entries or CORPUS).items():
        Image.new("RGB", size, color=(gray, gray, gray)).save(directory / f"{stem}{ext}")
        (directory / f"{stem}.txt").write_bytes(text.encode("utf-8"))
    return directory


# Common test fixtures
@pytest.fixture
def corpus_dir(tmp_path: Path):
    """Three-image corpus with expected texts."""
    return write_corpus(tmp_path / "qrcode-1")


@pytest.fixture
def answers():
    """Gray level -> text for the default corpus."""
    return {gray: text for gray, text in CORPUS.values()}


@pytest.fixture
def reader(answers):
    """Reader that decodes every default fixture correctly."""
    return ScriptedReader(answers)


@pytest.fixture
def make_reader(answers):
    """Factory for ScriptedReader over the default corpus answers."""
    def _make(**kwargs):
        return ScriptedReader(answers, **kwargs)
    return _make


@pytest.fixture
def make_corpus(tmp_path: Path):
    """Factory writing a corpus under tmp_path."""
    def _make(name="corpus", entries=None, **kwargs):
        return write_corpus(tmp_path / name, entries, **kwargs)
    return _make
