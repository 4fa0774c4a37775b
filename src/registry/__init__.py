"""
Admin Role Registry Module.

Firebase Auth custom claims for dashboard administrators.
"""
