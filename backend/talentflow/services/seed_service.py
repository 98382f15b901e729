"""First-boot data: five jobs, generated candidates with timelines, two assessments."""
import logging
import random
from datetime import datetime, timedelta

from talentflow.services.store import ASSESSMENTS, CANDIDATES, JOBS, TIMELINE, Store
from talentflow.services.timeline_service import STAGES, default_transition_note
from talentflow.utils.clock import to_timestamp

logger = logging.getLogger("talentflow.seed")

SEED_JOBS = [
    {"id": 1, "title": "Senior Frontend Developer", "slug": "senior-frontend-developer",
     "status": "active", "tags": ["React", "TypeScript", "CSS"], "order": 1,
     "createdAt": "2024-01-15T00:00:00Z"},
    {"id": 2, "title": "Full Stack Engineer", "slug": "full-stack-engineer",
     "status": "active", "tags": ["Node.js", "React", "PostgreSQL"], "order": 2,
     "createdAt": "2024-01-20T00:00:00Z"},
    {"id": 3, "title": "UI/UX Designer", "slug": "ui-ux-designer",
     "status": "active", "tags": ["Figma", "Design Systems", "User Research"], "order": 3,
     "createdAt": "2024-02-01T00:00:00Z"},
    {"id": 4, "title": "DevOps Engineer", "slug": "devops-engineer",
     "status": "archived", "tags": ["AWS", "Docker", "Kubernetes"], "order": 4,
     "createdAt": "2024-01-10T00:00:00Z"},
    {"id": 5, "title": "Product Manager", "slug": "product-manager",
     "status": "active", "tags": ["Strategy", "Analytics", "Leadership"], "order": 5,
     "createdAt": "2024-02-10T00:00:00Z"},
]

SEED_ASSESSMENTS = [
    {
        "id": 1,
        "jobId": 1,
        "title": "Frontend Developer Assessment",
        "createdAt": "2024-01-15T00:00:00Z",
        "sections": [
            {
                "id": 1,
                "title": "Technical Knowledge",
                "questions": [
                    {"id": 1, "type": "single-choice", "question": "Which React hook is used for side effects?",
                     "options": ["useState", "useEffect", "useMemo", "useCallback"], "required": True},
                    {"id": 2, "type": "multi-choice", "question": "Select all valid CSS display values:",
                     "options": ["block", "inline", "flex", "grid", "table"], "required": True},
                    {"id": 3, "type": "short-text", "question": "What is your experience with TypeScript?",
                     "maxLength": 200, "required": True},
                ],
            },
            {
                "id": 2,
                "title": "Problem Solving",
                "questions": [
                    {"id": 4, "type": "long-text",
                     "question": "Describe how you would optimize a React application's performance.",
                     "maxLength": 1000, "required": True},
                    {"id": 5, "type": "numeric", "question": "How many years of React experience do you have?",
                     "min": 0, "max": 20, "required": True},
                    {"id": 6, "type": "file-upload", "question": "Upload a code sample (optional).",
                     "required": False},
                ],
            },
        ],
    },
    {
        "id": 2,
        "jobId": 2,
        "title": "Full Stack Assessment",
        "createdAt": "2024-01-20T00:00:00Z",
        "sections": [
            {
                "id": 1,
                "title": "Backend Knowledge",
                "questions": [
                    {"id": 1, "type": "single-choice", "question": "Which is NOT a HTTP method?",
                     "options": ["GET", "POST", "FETCH", "DELETE"], "required": True},
                    {"id": 2, "type": "short-text", "question": "Explain REST API principles briefly:",
                     "maxLength": 300, "required": True},
                ],
            },
        ],
    },
]

FIRST_NAMES = ["John", "Jane", "Mike", "Sarah", "David", "Emily", "Chris", "Lisa", "Tom", "Anna"]
LAST_NAMES = ["Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis", "Rodriguez", "Martinez"]

# Walked in this fixed order up to the candidate's stage, so a rejected
# candidate also gets screen..hired entries. Kept as-is pending product input.
PROGRESSION = ["screen", "tech", "offer", "hired", "rejected"]


def generate_candidates(rng: random.Random, count: int = 1000) -> list[dict]:
    candidates = []
    for i in range(1, count + 1):
        first = rng.choice(FIRST_NAMES)
        last = rng.choice(LAST_NAMES)
        created = datetime(2024, rng.randint(1, 12), rng.randint(1, 28))
        candidates.append({
            "id": i,
            "name": f"{first} {last}",
            "email": f"{first.lower()}.{last.lower()}{i}@email.com",
            "stage": rng.choice(STAGES),
            "jobId": rng.randint(1, len(SEED_JOBS)),
            "createdAt": to_timestamp(created),
        })
    return candidates


def generate_timelines(candidates: list[dict]) -> list[dict]:
    entries = []
    for candidate in candidates:
        created = datetime.strptime(candidate["createdAt"], "%Y-%m-%dT%H:%M:%SZ")
        entries.append({
            "candidateId": candidate["id"],
            "stage": "applied",
            "timestamp": candidate["createdAt"],
            "notes": "Application submitted",
        })
        if candidate["stage"] not in PROGRESSION:
            continue
        for i, stage in enumerate(PROGRESSION[:PROGRESSION.index(candidate["stage"]) + 1]):
            entries.append({
                "candidateId": candidate["id"],
                "stage": stage,
                "timestamp": to_timestamp(created + timedelta(days=7 * (i + 1))),
                "notes": default_transition_note(stage),
            })
    return entries


def seed_database(store: Store, candidate_count: int = 1000, rng: random.Random | None = None) -> bool:
    """Populate an empty store. Returns False without writing if jobs already exist."""
    rng = rng or random.Random()
    with store.transaction(JOBS, CANDIDATES, TIMELINE, ASSESSMENTS) as tx:
        if tx.count(JOBS) > 0:
            logger.info("Store already populated, skipping seed.")
            return False

        logger.info("Seeding database...")
        candidates = generate_candidates(rng, candidate_count)
        timelines = generate_timelines(candidates)
        tx.bulk_insert(JOBS, SEED_JOBS)
        tx.bulk_insert(CANDIDATES, candidates)
        tx.bulk_insert(TIMELINE, timelines)
        tx.bulk_insert(ASSESSMENTS, SEED_ASSESSMENTS)

    logger.info(
        "Database seeded: %d jobs, %d candidates, %d timeline entries, %d assessments",
        len(SEED_JOBS), len(candidates), len(timelines), len(SEED_ASSESSMENTS),
    )
    return True
