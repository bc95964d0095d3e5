"""Shared pytest fixtures for amimake tests."""

import tempfile
from pathlib import Path

import pytest

from amimake.model import Dialect


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def gnu_makefile(fixtures_dir: Path) -> Path:
    """Path to the sample GNU Makefile."""
    return fixtures_dir / "Makefile"


@pytest.fixture
def sas_smakefile(fixtures_dir: Path) -> Path:
    """Path to the sample SAS/C smakefile."""
    return fixtures_dir / "smakefile"


@pytest.fixture
def dice_dmakefile(fixtures_dir: Path) -> Path:
    """Path to the sample DICE dmakefile."""
    return fixtures_dir / "dmakefile"


@pytest.fixture
def lattice_lmkfile(fixtures_dir: Path) -> Path:
    """Path to the sample Lattice lmkfile."""
    return fixtures_dir / "lmkfile"


@pytest.fixture
def sample_files(gnu_makefile, sas_smakefile, dice_dmakefile, lattice_lmkfile) -> dict[Dialect, Path]:
    """Sample build file per dialect."""
    return {
        Dialect.GNU_MAKE: gnu_makefile,
        Dialect.SAS_C: sas_smakefile,
        Dialect.DICE: dice_dmakefile,
        Dialect.LATTICE: lattice_lmkfile,
    }


@pytest.fixture
def temp_output_dir():
    """Create a temporary directory for file output tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def write_makefile(temp_output_dir: Path):
    """Return a helper that writes text to a file in the temporary directory."""
    def _write(text: str, name: str = "makefile") -> Path:
        path = temp_output_dir / name
        path.write_text(text, encoding="latin-1")
        return path
    return _write
