"""SmartGuard configuration constants."""

# Directories to skip during scanning
DEFAULT_IGNORE_DIRS: list[str] = [
    "node_modules",
    ".git",
    "artifacts",
    "cache",
    "out",
    "build",
    "coverage",
    "typechain-types",
]

DEFAULT_SCAN_EXTENSIONS: list[str] = [
    ".sol",
]

# Terminal display only; Finding.code always keeps the full line.
SNIPPET_MAX_LENGTH: int = 120
