"""Attendance Tracker package.

Feature modules (users, attendance, reports) each expose a thin Flask
controller on top of service and repository layers.
"""
