from .team import Team
from .user import User
from .pull_request import PullRequest, PullRequestReviewer, PRStatus

# все модели должны быть импортированы здесь, чтобы попасть в Base.metadata
