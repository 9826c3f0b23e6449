"""
ats-core: hiring pipeline domain service.

In-memory candidates, jobs, applications and assessments with an application
workflow state machine, stage SLA tracking and candidate-job skill matching.
"""

from ats_core.utils.constants import APP_NAME, VERSION

__app_name__ = APP_NAME
__version__ = VERSION

__all__ = ["__app_name__", "__version__"]
