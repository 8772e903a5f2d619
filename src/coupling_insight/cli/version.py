"""Version command."""

from .. import __version__
from . import app
from ._common import console


@app.command()
def version():
    """Show the installed version."""
    console.print(f"coupling-insight {__version__}")
