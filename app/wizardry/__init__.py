# Step views of the Streamlit wizard, keyed by wizard step id
from common import constants

from . import step1_name
from . import step2_import
from . import step3_config

STEP_VIEWS = {
    constants.NAME_STEP: step1_name,
    constants.IMPORT_STEP: step2_import,
    constants.CONFIG_STEP: step3_config,
}

__all__ = [
    'STEP_VIEWS',
    'step1_name',
    'step2_import',
    'step3_config',
]
