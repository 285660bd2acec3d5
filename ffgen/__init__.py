"""Generate File Forge (ffg) commands from open files and their imports."""

__version__ = "0.1.0"
