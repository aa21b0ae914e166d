"""Bot traffic statistics from HTTP access logs (Apache/Nginx and IIS)."""

__version__ = "0.1.0"
