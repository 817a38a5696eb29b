"""Default ``.gitignore`` for generated projects."""

from __future__ import annotations

from .tree import ProjectTree

GITIGNORE_PATH = ".gitignore"

DEFAULT_GITIGNORE = """# Logs
logs
*.log
npm-debug.log*


build/Release

node_modules/

*.tsbuildinfo

.npm

.eslintcache

.stylelintcache

*.tgz

.env
.env.*
!.env.example

dist

.temp
.cache

**/.vitepress/dist
**/.vitepress/cache
vite.config.js.timestamp-*
vite.config.ts.timestamp-*

# Stores VSCode versions used for testing VSCode extensions
.vscode-test
"""


def ensure_gitignore(tree: ProjectTree) -> ProjectTree:
    """Add the default ``.gitignore`` unless the skeleton ships one."""
    if GITIGNORE_PATH in tree:
        return tree
    return tree.with_file(GITIGNORE_PATH, DEFAULT_GITIGNORE)
