"""Home — the per-user application directory and everything kept in it.

- lock: cross-process mutual exclusion for home preparation
- stamp: the last successfully provisioned version
- sources / assets: walking and extracting the shipped asset tree
- retention: reclaiming old asset versions
- app: the orchestrating ``App.prepare_home``
"""

PATH_ASSETS = "assets"
PATH_LOCK = "lock"
PATH_VERSION = "version"
PATH_CONFIG = "config.yaml"
