import os
import sys
from pathlib import Path


def _ensure_repo_root_first() -> Path:
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str in sys.path:
        sys.path.remove(repo_root_str)
    sys.path.insert(0, repo_root_str)
    return repo_root


_ensure_repo_root_first()
# GUI 测试不需要真实显示器
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
