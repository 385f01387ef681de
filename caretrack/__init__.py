"""CareTrack application.

API client, boundary serializers, domain services and stores for the
maternal and child health record backend, plus the operator console that
renders their state.
"""
