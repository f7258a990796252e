"""whyinstall core package.

Explains why an installed npm package is present in a project, how much it
weighs together with its dependencies, and where project code uses it. The
analysis entrypoints are callable from the bundled CLI and from other tools.
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "core",
]
