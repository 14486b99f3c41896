from campus_portal.models.announcement import Announcement  # noqa: F401
from campus_portal.models.assignment import Assignment  # noqa: F401
from campus_portal.models.chat_message import ChatMessage  # noqa: F401
from campus_portal.models.feedback import Feedback  # noqa: F401
from campus_portal.models.material import Material  # noqa: F401
from campus_portal.models.notification import Notification  # noqa: F401
from campus_portal.models.notification_read import NotificationRead  # noqa: F401
from campus_portal.models.result import Result  # noqa: F401
from campus_portal.models.submission import Submission  # noqa: F401
from campus_portal.models.user import User  # noqa: F401
