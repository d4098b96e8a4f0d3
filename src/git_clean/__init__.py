"""Git branch cleanup tool.

Features:
- Find local branches already merged into a base branch
- Detect squash-merged branches with a fast-forward pull check
- Delete merged branches locally, remotely, or both
- Ignore list for branches that must never be touched
"""

import os

# Let validate_git_installation() report a missing git executable instead of GitPython failing at import.
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")

__version__ = "0.1.0"
