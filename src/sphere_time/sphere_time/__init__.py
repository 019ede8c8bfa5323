"""Sphere Time Control attendance core.

This package is organized by feature modules (employees, attendance, reports, ...)
with a thin Flask integration layer and SOLID service/repository layers. Every
service call takes the tenant explicitly; nothing tenant-specific is global.
"""
