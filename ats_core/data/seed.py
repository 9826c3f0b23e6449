"""
Demo data for ats-core.

Six candidates, three jobs, seven applications and ten assessment results.
Timestamps are relative to ``now`` so the SLA and stuck-application reports
show a realistic mix every time the data is loaded.
"""

from datetime import datetime, timedelta
from typing import Optional

from ats_core.data.models import (
    Application,
    AssessmentResult,
    Candidate,
    Job,
    RecruiterNote,
    StatusHistoryEntry,
    utc_now,
)
from ats_core.data.store import APPLICATIONS, ASSESSMENTS, CANDIDATES, JOBS, EntityStore
from ats_core.utils.constants import (
    SYSTEM_ACTOR,
    ApplicationSource,
    ApplicationStatus as S,
    AssessmentType,
    CandidateStatus,
    EmploymentType,
    JobStatus,
)
from ats_core.utils.logger import get_logger

logger = get_logger(__name__)


def demo_candidates(now: datetime) -> list[Candidate]:
    def ago(days: int) -> datetime:
        return now - timedelta(days=days)

    return [
        Candidate(
            id="C001", name="Alice Johnson", email="alice.johnson@example.com", phone="+1-555-0101",
            location="San Francisco, CA",
            skills=["Java", "Spring Boot", "AWS", "Kubernetes", "Microservices"],
            years_of_experience=8, current_role="Senior Software Engineer", current_company="Acme Corp",
            summary="Experienced Java engineer with cloud-native expertise. Led migration of "
                    "monolith to microservices for 2M+ user platform.",
            linkedin_url="linkedin.com/in/alice-johnson", created_at=ago(30),
        ),
        Candidate(
            id="C002", name="Bob Smith", email="bob.smith@example.com", phone="+1-555-0102",
            location="New York, NY",
            skills=["Python", "Machine Learning", "TensorFlow", "PyTorch", "MLOps"],
            years_of_experience=5, current_role="ML Engineer", current_company="DataDriven Inc",
            summary="ML engineer specializing in production NLP systems. Published researcher "
                    "with 3 patents in deep learning.",
            linkedin_url="linkedin.com/in/bob-smith-ml", created_at=ago(20),
        ),
        Candidate(
            id="C003", name="Carol Williams", email="carol.w@example.com", phone="+1-555-0103",
            location="Austin, TX",
            skills=["React", "TypeScript", "Node.js", "GraphQL", "PostgreSQL"],
            years_of_experience=6, current_role="Full Stack Developer", current_company="StartupXYZ",
            summary="Full-stack developer with modern web stack expertise. Built and shipped "
                    "4 SaaS products from 0 to 1.",
            linkedin_url="linkedin.com/in/carol-williams-dev", created_at=ago(15),
        ),
        Candidate(
            id="C004", name="David Brown", email="david.brown@example.com", phone="+1-555-0104",
            location="Seattle, WA",
            skills=["Java", "Microservices", "Kafka", "Docker", "System Design", "Architecture"],
            years_of_experience=12, current_role="Lead Software Architect", current_company="BigTech LLC",
            summary="Architect with 12 years designing high-throughput distributed systems. "
                    "Scaled platform to handle 500K TPS.",
            linkedin_url="linkedin.com/in/david-brown-arch", created_at=ago(45),
        ),
        Candidate(
            id="C005", name="Emma Davis", email="emma.davis@example.com", phone="+1-555-0105",
            location="Remote",
            skills=["Go", "Rust", "Linux", "Terraform", "CI/CD", "Observability"],
            years_of_experience=7, current_role="Platform Engineer", current_company="CloudNative Co",
            status=CandidateStatus.HIRED,
            summary="Platform engineer who built internal developer platform used by 200+ "
                    "engineers. SRE background.",
            linkedin_url="linkedin.com/in/emma-davis-platform", created_at=ago(60),
        ),
        Candidate(
            id="C006", name="Frank Lee", email="frank.lee@example.com", phone="+1-555-0106",
            location="Chicago, IL",
            skills=["Java", "Spring Boot", "Kafka", "Redis", "MySQL"],
            years_of_experience=4, current_role="Software Engineer", current_company="FinTech Solutions",
            summary="Backend engineer with fintech background. Built real-time payment "
                    "processing system handling $10M/day.",
            linkedin_url="linkedin.com/in/frank-lee-dev", created_at=ago(10),
        ),
    ]


def demo_jobs(now: datetime) -> list[Job]:
    def ago(days: int) -> datetime:
        return now - timedelta(days=days)

    return [
        Job(
            id="J001", title="Senior Software Engineer", department="Engineering",
            location="San Francisco, CA / Remote", employment_type=EmploymentType.FULL_TIME,
            status=JobStatus.OPEN,
            description="Join our platform team to build the next generation of our core product. "
                        "You'll architect and implement scalable backend services handling millions of users.",
            required_skills=["Java", "Spring Boot", "Microservices", "AWS"],
            preferred_skills=["Kafka", "Kubernetes", "System Design"],
            salary_range="$160,000 - $210,000", hiring_manager_id="HM001",
            hiring_manager_name="Sarah Connor", opened_at=ago(45),
        ),
        Job(
            id="J002", title="Machine Learning Engineer", department="Data Science",
            location="New York, NY / Hybrid", employment_type=EmploymentType.FULL_TIME,
            status=JobStatus.OPEN,
            description="Build and deploy production ML models that power our recommendation and "
                        "fraud-detection systems. Partner with data scientists to productionize research work.",
            required_skills=["Python", "Machine Learning", "TensorFlow", "MLOps"],
            preferred_skills=["PyTorch", "Spark", "Kubernetes"],
            salary_range="$150,000 - $200,000", hiring_manager_id="HM002",
            hiring_manager_name="John Wick", opened_at=ago(30),
        ),
        Job(
            id="J003", title="Platform Engineer", department="Infrastructure",
            location="Remote", employment_type=EmploymentType.FULL_TIME,
            status=JobStatus.FILLED,
            description="Own and evolve our internal developer platform. Drive developer productivity "
                        "initiatives and build the tooling, CI/CD pipelines, and observability stack "
                        "used by all engineering teams.",
            required_skills=["Go", "Kubernetes", "Terraform", "CI/CD"],
            preferred_skills=["Rust", "Linux", "Observability"],
            salary_range="$140,000 - $180,000", hiring_manager_id="HM003",
            hiring_manager_name="Diana Prince", opened_at=ago(90),
        ),
    ]


def demo_applications(now: datetime) -> list[Application]:
    def ago(days: int) -> datetime:
        return now - timedelta(days=days)

    def history(*steps: tuple[S, int, str, str]) -> list[StatusHistoryEntry]:
        return [
            StatusHistoryEntry(status=status, changed_at=ago(days), changed_by=actor, reason=reason)
            for status, days, actor, reason in steps
        ]

    def note(note_id: str, app_id: str, body: str, author_id: str, author_name: str, days: int) -> RecruiterNote:
        return RecruiterNote(
            id=note_id, application_id=app_id, note=body,
            author_id=author_id, author_name=author_name, created_at=ago(days),
        )

    return [
        Application(
            id="A001", candidate_id="C001", job_id="J001", status=S.FINAL_INTERVIEW,
            source=ApplicationSource.LINKEDIN, applied_at=ago(28), current_interview_round=3,
            status_history=history(
                (S.RECEIVED, 28, SYSTEM_ACTOR, "Application received"),
                (S.SCREENING, 25, "recruiter-1", "Passed resume screening"),
                (S.PHONE_INTERVIEW, 20, "recruiter-1", "Phone screen completed"),
                (S.TECHNICAL_INTERVIEW, 14, "recruiter-1", "Technical round passed"),
                (S.FINAL_INTERVIEW, 3, "recruiter-1", "Scheduled final interview"),
            ),
            notes=[
                note("N001", "A001", "Strong Java background. Answered system design questions confidently.",
                     "recruiter-1", "Jane Smith", 20),
                note("N002", "A001", "Technical round: solved 2 medium LeetCode problems optimally. "
                     "Good communication.", "recruiter-1", "Jane Smith", 14),
            ],
        ),
        Application(
            id="A002", candidate_id="C002", job_id="J002", status=S.PHONE_INTERVIEW,
            source=ApplicationSource.REFERRAL, applied_at=ago(18), current_interview_round=1,
            status_history=history(
                (S.RECEIVED, 18, SYSTEM_ACTOR, "Application received"),
                (S.SCREENING, 15, "recruiter-2", "Excellent ML background"),
                (S.PHONE_INTERVIEW, 7, "recruiter-2", "Phone screen scheduled"),
            ),
            notes=[
                note("N003", "A002", "Referred by Dr. Emily Chen (Head of Research). Strong ML profile, "
                     "3 patents.", "recruiter-2", "Mark Johnson", 18),
            ],
        ),
        Application(
            id="A003", candidate_id="C003", job_id="J001", status=S.SCREENING,
            source=ApplicationSource.DIRECT, applied_at=ago(10), current_interview_round=0,
            status_history=history(
                (S.RECEIVED, 10, SYSTEM_ACTOR, "Application received"),
                (S.SCREENING, 7, "recruiter-1", "Under resume review"),
            ),
        ),
        Application(
            id="A004", candidate_id="C004", job_id="J001", status=S.OFFER_EXTENDED,
            source=ApplicationSource.AGENCY, applied_at=ago(40), current_interview_round=4,
            status_history=history(
                (S.RECEIVED, 40, SYSTEM_ACTOR, "Agency submission"),
                (S.SCREENING, 38, "recruiter-1", "Top-tier candidate"),
                (S.PHONE_INTERVIEW, 33, "recruiter-1", "Excellent culture fit"),
                (S.TECHNICAL_INTERVIEW, 25, "recruiter-1", "Passed all technical rounds"),
                (S.FINAL_INTERVIEW, 15, "recruiter-1", "Final exec interview done"),
                (S.OFFER_EXTENDED, 5, "recruiter-1", "Offer sent: $195K + equity"),
            ),
            notes=[
                note("N004", "A004", "Exceptional system design skills. 12 years of relevant experience. "
                     "HIGHLY RECOMMENDED.", "recruiter-1", "Jane Smith", 25),
                note("N005", "A004", "Offer extended. Candidate is comparing with two other offers. "
                     "Decision expected by EOW.", "recruiter-1", "Jane Smith", 5),
            ],
        ),
        Application(
            id="A005", candidate_id="C005", job_id="J003", status=S.HIRED,
            source=ApplicationSource.LINKEDIN, applied_at=ago(80), current_interview_round=3,
            status_history=history(
                (S.RECEIVED, 80, SYSTEM_ACTOR, "Application received"),
                (S.SCREENING, 76, "recruiter-3", "Strong platform background"),
                (S.PHONE_INTERVIEW, 70, "recruiter-3", "Excellent fit"),
                (S.TECHNICAL_INTERVIEW, 63, "recruiter-3", "Top-notch"),
                (S.FINAL_INTERVIEW, 55, "recruiter-3", "Passed final"),
                (S.OFFER_EXTENDED, 50, "recruiter-3", "Offer accepted"),
                (S.HIRED, 30, SYSTEM_ACTOR, f"Started on {ago(30).date().isoformat()}"),
            ),
            notes=[
                note("N006", "A005", "Best platform candidate we've seen this year. Offer accepted "
                     "immediately.", "recruiter-3", "Tom Wilson", 50),
            ],
        ),
        Application(
            id="A006", candidate_id="C001", job_id="J003", status=S.REJECTED,
            source=ApplicationSource.DIRECT, applied_at=ago(50), current_interview_round=1,
            status_history=history(
                (S.RECEIVED, 50, SYSTEM_ACTOR, "Application received"),
                (S.SCREENING, 48, "recruiter-3", "Go/Rust skills missing"),
                (S.REJECTED, 46, "recruiter-3", "Skills mismatch for platform role"),
            ),
            notes=[
                note("N007", "A006", "Strong Java background but no Go/Rust/Terraform experience required "
                     "for this role. Rejected. Consider for J001.", "recruiter-3", "Tom Wilson", 46),
            ],
        ),
        Application(
            id="A007", candidate_id="C006", job_id="J001", status=S.TECHNICAL_INTERVIEW,
            source=ApplicationSource.JOB_BOARD, applied_at=ago(8), current_interview_round=2,
            status_history=history(
                (S.RECEIVED, 8, SYSTEM_ACTOR, "Application received"),
                (S.SCREENING, 6, "recruiter-1", "Good fintech background"),
                (S.PHONE_INTERVIEW, 3, "recruiter-1", "Phone screen passed"),
                (S.TECHNICAL_INTERVIEW, 1, "recruiter-1", "Technical round today"),
            ),
            notes=[
                note("N008", "A007", "Real-time payment processing experience is very relevant. "
                     "Tracking closely.", "recruiter-1", "Jane Smith", 6),
            ],
        ),
    ]


def demo_assessments(now: datetime) -> list[AssessmentResult]:
    def ago(days: int) -> datetime:
        return now - timedelta(days=days)

    T = AssessmentType
    rows = [
        ("AS001", "C001", "A001", T.CODING_CHALLENGE, 85, 88, 22,
         "Solved 3/3 problems. Optimal solution for two, brute-force for the third.",
         {"problemsSolved": 3, "optimalSolutions": 2, "timeUsedMinutes": 72, "languages": ["Java"]}),
        ("AS002", "C001", "A001", T.SYSTEM_DESIGN, 78, 75, 16,
         "Designed a URL shortener at scale. Good understanding of caching and sharding, "
         "missed CDN edge cases.",
         {"designScore": 80, "scalabilityScore": 82, "reliabilityScore": 70,
          "communicationScore": 85, "missingTopics": ["CDN", "Global failover"]}),
        ("AS003", "C002", "A002", T.TECHNICAL_SCREENING, 90, 94, 10,
         "Exceptional ML fundamentals. Deep knowledge of transformer architectures and MLOps.",
         {"mlTheoryScore": 95, "mlOpsScore": 88, "codingScore": 87,
          "papersDiscussed": ["Attention is All You Need", "BERT", "GPT-4 Technical Report"]}),
        ("AS004", "C003", "A003", T.CODING_CHALLENGE, 72, 65, 5,
         "Completed 2/3 problems. Strong frontend skills but backend algorithm weak.",
         {"problemsSolved": 2, "optimalSolutions": 1, "timeUsedMinutes": 85,
          "languages": ["TypeScript", "Node.js"]}),
        ("AS005", "C004", "A004", T.CODING_CHALLENGE, 92, 97, 27,
         "Flawless. All 3 problems solved optimally with detailed complexity analysis.",
         {"problemsSolved": 3, "optimalSolutions": 3, "timeUsedMinutes": 55, "languages": ["Java"],
          "bonus": "Provided two alternative solutions for problem 2"}),
        ("AS006", "C004", "A004", T.SYSTEM_DESIGN, 94, 98, 20,
         "Outstanding system design for a distributed job scheduler. Covered partitioning, "
         "replication, consensus, observability.",
         {"designScore": 96, "scalabilityScore": 95, "reliabilityScore": 94, "communicationScore": 92,
          "standoutTopics": ["Raft consensus", "Back-pressure", "Circuit breaker"]}),
        ("AS007", "C004", "A004", T.BEHAVIORAL, 88, 85, 15,
         "Strong leadership examples. Clear ownership mentality. Handled conflict scenarios well.",
         {"leadershipScore": 90, "communicationScore": 88, "problemSolvingScore": 86,
          "starStoriesProvided": 5}),
        ("AS008", "C005", "A005", T.CODING_CHALLENGE, 88, 91, 75,
         "Solved all problems in Go. Particularly strong on concurrency patterns.",
         {"problemsSolved": 3, "optimalSolutions": 3, "timeUsedMinutes": 60, "languages": ["Go", "Rust"]}),
        ("AS009", "C005", "A005", T.TAKE_HOME_PROJECT, 95, 99, 68,
         "Built a fully functional CI/CD pipeline tool in Go. Clean code, comprehensive tests, "
         "excellent docs.",
         {"codeQuality": 96, "testCoverage": 94, "documentation": 98,
          "repoLink": "github.com/emmadavis/pipeline-demo"}),
        ("AS010", "C006", "A007", T.CODING_CHALLENGE, 78, 72, 2,
         "Solved 2/3 problems optimally. Showed strong Java concurrency knowledge.",
         {"problemsSolved": 3, "optimalSolutions": 2, "timeUsedMinutes": 80, "languages": ["Java"]}),
    ]
    return [
        AssessmentResult(
            id=rid, candidate_id=cid, application_id=aid, type=kind,
            score=score, max_score=100, percentile=pct, completed_at=ago(days),
            summary=summary, breakdown=breakdown,
        )
        for rid, cid, aid, kind, score, pct, days, summary, breakdown in rows
    ]


def load_demo_data(store: EntityStore, now: Optional[datetime] = None) -> None:
    """Insert the demo entities into a store, dated relative to ``now``."""
    now = now or utc_now()
    batches = (
        (CANDIDATES, demo_candidates(now)),
        (JOBS, demo_jobs(now)),
        (APPLICATIONS, demo_applications(now)),
        (ASSESSMENTS, demo_assessments(now)),
    )
    for collection, entities in batches:
        for entity in entities:
            store.insert(collection, entity)
    logger.info(
        "Loaded demo data: "
        + ", ".join(f"{len(entities)} {collection}" for collection, entities in batches)
    )
