"""
FieldStock - stock allocation and handover reconciliation for ISP field
operations.

Decides which inventory unit satisfies a request, splits measured stock
(cable drums) into consumable lengths, flags low stock and turns source
documents into ready-to-submit handovers.
"""

__version__ = "1.0.0"
