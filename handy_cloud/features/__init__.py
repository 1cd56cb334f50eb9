"""Feature packages for the cloud client layer."""
