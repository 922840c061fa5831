# =============================================================================
# edunexus_core/offline/collections.py
# Collection catalog: endpoint, local key and codec for each record type
# =============================================================================

from edunexus_core.models import Message, Quiz, QuizResult, StudyMaterial, User
from edunexus_core.offline.failover import CollectionSpec
from edunexus_core.offline.seeder import seed_quizzes, seed_users

USERS = CollectionSpec(
    name="users",
    endpoint="/users",
    decode=User.from_dict,
    encode=User.to_dict,
    default=seed_users,
)

QUIZZES = CollectionSpec(
    name="quizzes",
    endpoint="/quizzes",
    decode=Quiz.from_dict,
    encode=Quiz.to_dict,
    default=seed_quizzes,
)

RESULTS = CollectionSpec(
    name="results",
    endpoint="/results",
    decode=QuizResult.from_dict,
    encode=QuizResult.to_dict,
)

MATERIALS = CollectionSpec(
    name="materials",
    endpoint="/materials",
    decode=StudyMaterial.from_dict,
    encode=StudyMaterial.to_dict,
)

MESSAGES = CollectionSpec(
    name="messages",
    endpoint="/messages",
    decode=Message.from_dict,
    encode=Message.to_dict,
)

ALL_COLLECTIONS = (USERS, QUIZZES, RESULTS, MATERIALS, MESSAGES)
