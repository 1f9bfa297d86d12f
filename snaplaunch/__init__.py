"""snaplaunch: fetch, normalize, configure and supervise a remote Node.js app."""

__version__ = "0.1.0"
