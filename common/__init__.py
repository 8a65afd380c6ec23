"""
Shared constants, models, errors and logging for the Project Creation Wizard.
"""
