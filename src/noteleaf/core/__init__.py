"""Ports shared by every record kind and by the external repository layer."""
