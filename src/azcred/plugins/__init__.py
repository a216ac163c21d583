"""Built-in credential providers.

* :mod:`azcred.plugins.device_code` -- interactive OAuth2 device code flow.
* :mod:`azcred.plugins.manual_token` -- pre-obtained bearer token.
"""
