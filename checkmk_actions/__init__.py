"""
Checkmk Actions

Exposes the Checkmk REST API as "resource + operation" actions for
workflow-automation hosts.
"""

# Logging is configured by the embedding host via checkmk_actions/logging_utils.py
# No need to configure logging here.

__version__ = "0.1.0"
__author__ = "Checkmk Actions"
__description__ = "Resource/operation adapter for the Checkmk REST API"
