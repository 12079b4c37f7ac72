"""Poll a remote container's logs until the deployed application starts or fails."""

__version__ = "0.1.0"
