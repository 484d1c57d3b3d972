"""
Main entrypoint: analyse imaging slices from the command line.

Equivalent to the ctmri-analyze console script:
    python main.py slice.png --format json

Env: CTMRI_MAX_SIDE, CTMRI_MIN_SIDE, LOG_LEVEL, LOG_FORMAT (see ctmri_analyzer.config).
"""

from ctmri_analyzer.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
