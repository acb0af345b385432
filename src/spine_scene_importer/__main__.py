# SPDX-License-Identifier: MIT
"""Allow running as ``python -m spine_scene_importer``."""

import sys

from spine_scene_importer.cli import main

sys.exit(main())
