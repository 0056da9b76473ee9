"""Tracker application for the medication tracker backend.

This package contains models, serializers, services, views and route
registrations implementing the API contract expected by the front-end
application.
"""
