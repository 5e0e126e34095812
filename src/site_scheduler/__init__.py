"""Site Scheduler package.

Recurring weekly shift scheduling for cleaning sites, organized by feature
modules (shifts, access, payroll, ...) with a thin Flask controller layer on
top of service/repository layers.
"""
