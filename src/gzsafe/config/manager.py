from pathlib import Path
from copy import deepcopy
import json, os

APP_DIR = Path(os.getenv('APPDATA', '.')) / 'gzsafe'
CFG_PATH = APP_DIR / 'config.json'

DEFAULTS = {
  "io": {"chunk_size": 65536, "queue_depth": 4, "remove_partial_on_error": False},
  "round_trip": {"source": "files/source.txt", "destination": "files/source_decompressed.txt"},
  "logging": {"level": "INFO", "file": None}
}

def get_config_path() -> Path: return CFG_PATH

def _merge(base: dict, over: dict) -> dict:
    out = deepcopy(base)
    for k, v in over.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out

def load_config() -> dict:
    try:
        user = json.loads(CFG_PATH.read_text(encoding='utf-8'))
    except FileNotFoundError:
        APP_DIR.mkdir(parents=True, exist_ok=True)
        save_config(DEFAULTS)
        return deepcopy(DEFAULTS)
    return _merge(DEFAULTS, user)

def save_config(cfg: dict) -> None:
    APP_DIR.mkdir(parents=True, exist_ok=True)
    CFG_PATH.write_text(json.dumps(cfg, ensure_ascii=False, indent=2), encoding='utf-8')
