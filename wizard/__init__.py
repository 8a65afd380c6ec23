"""
Project Creation Wizard core.
Turns a freshly created draft project into a committed project in three
steps: naming, data import and labeling setup.
"""

from .controller import CreateProjectWizard, FinalizeController
from .import_phase import FileImportPhase, ImportPhaseAdapter, NoImportPhase
from .navigation import HistoryNavigator, Navigator
from .state import WizardState, WizardStep, build_submission

__all__ = [
    'CreateProjectWizard',
    'FinalizeController',
    'FileImportPhase',
    'ImportPhaseAdapter',
    'NoImportPhase',
    'HistoryNavigator',
    'Navigator',
    'WizardState',
    'WizardStep',
    'build_submission',
]
