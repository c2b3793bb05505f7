"""Packaged wine catalog data, one subpackage per catalog version."""
