# models_bootstrap.py
# Import every model module so Base.metadata knows all tables.
from user import models as _user_models
from employeeprofile import models as _profile_models
from project import models as _project_models
from meeting import models as _meeting_models
from assignment import models as _assignment_models
from comment import models as _comment_models
from task import models as _task_models
from announcement import models as _announcement_models
from requisition import models as _requisition_models
from note import models as _note_models
from reminder import models as _reminder_models
