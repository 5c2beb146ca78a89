"""SIWES attendance portal package.

This package is organized by feature modules (auth, profiles, attendance,
reports, locations) with a thin Flask controller layer over service and
repository layers.
"""
