"""create-valet-app -- scaffold Valet + React + Vite projects.

The composition engine lives in :mod:`create_valet_app.scaffolder`; the
command-line entry point is :func:`create_valet_app.cli.main`.
"""

__version__ = "0.30.0"
