"""School administration package.

This package is organized by feature modules (students, attendance, classes,
events, announcements, dashboard) with a thin Flask controller layer over
service/repository layers.
"""
