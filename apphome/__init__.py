"""apphome — versioned asset provisioning for per-user application homes."""

__version__ = "0.1.0"
