"""Application layer: DTOs, service interfaces and the dashboard orchestrator.

Depends on domain only; infrastructure is injected through the protocols
in adminpanel.application.interfaces.
"""
