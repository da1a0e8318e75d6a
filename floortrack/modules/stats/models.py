# Read-only views over the aps and clients tables
# No table of its own; see modules/aps/models.py and modules/devices/models.py
