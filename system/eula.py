# system/eula.py
from pathlib import Path
from logger import log

EULA_PATH = Path("/cdrom/EULA")
MISSING_EULA = "< Debug build - ignoring non-existing EULA >"


def get_eula(path: Path = EULA_PATH) -> str:
    try:
        return Path(path).read_text()
    except OSError as e:
        log.warning("Could not read EULA from %s: %s", path, e)
        return MISSING_EULA
