"""
autoflutter Provisioning System
===============================

ARCHITECTURAL OVERVIEW:
----------------------

    ┌──────────────────────────────────────────────────────────────┐
    │                 PROVISIONER (provision.py)                   │
    │        banner -> detect -> tools in order -> finalize        │
    └──────────────────────────────┬───────────────────────────────┘
                                   │
       ┌───────────────┬───────────┼───────────────┬───────────────┐
       ▼               ▼           ▼               ▼               ▼
    DETECTOR      PATH LEDGER   EXECUTOR        REGISTRY       FINALIZER
    shell, rc,    live PATH +   ShellSession,   Tool classes   licenses,
    arch, prefix  rc file       check/install/  and order      flutter config
                                register

USAGE:
-----

    from autoflutter.config.settings import load_settings
    from autoflutter.installer.provision import Provisioner

    exit_code = Provisioner(load_settings()).run()

The core modules live in autoflutter.installer.core and can be used on
their own (e.g. PathLedger in other scripts).
"""
