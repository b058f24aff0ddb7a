"""SIMAKA school attendance system.

Organized by feature modules (students, attendance, teachers, reports, ...)
with a thin Flask controller layer over service/repository layers.
"""
