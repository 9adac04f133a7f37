from app.crud import crud_competition, crud_course, crud_exam, projections
from app.models.competition import Competition, CompetitionParticipant, CompetitionProblem
from app.models.course import Course, CourseLesson, CourseModule
from app.models.exam import Exam, ExamAnswerTemplate, ExamQuestion
from app.schemas.result import Success, ValidationFailure
from tests.utils.db import count_rows, fetch_row
from tests.utils.payloads import competition_payload, course_payload, exam_payload

MODULES = [
    {
        "title": "Basics",
        "lessons": [
            {"title": "Hello", "type": "video", "videoUrl": "https://cdn.example.com/hello.mp4"},
            {"title": "Loops", "type": "Coding", "content": "for i in range(3): ..."},
        ],
    },
    {"title": "Functions", "orderIndex": 5, "lessons": [{"title": "def", "content": "def f(): ..."}]},
]


# --- Courses ---
def test_course_with_modules_and_lessons(gateway):
    result = crud_course.course.create(gateway, course_payload(modules=MODULES))

    assert isinstance(result, Success)
    detail = projections.get_detail(gateway, crud_course.COURSE_DEFINITION, result.id)
    assert [m["title"] for m in detail["modules"]] == ["Basics", "Functions"]
    assert [m["order_index"] for m in detail["modules"]] == [0, 5]

    basics = detail["modules"][0]
    assert [lesson["title"] for lesson in basics["lessons"]] == ["Hello", "Loops"]
    assert [lesson["order_index"] for lesson in basics["lessons"]] == [0, 1]
    assert basics["lessons"][1]["type"] == "coding"
    assert detail["modules"][1]["lessons"][0]["type"] == "text"


def test_course_module_replace_clears_nested_lessons(gateway):
    course_id = crud_course.course.create(gateway, course_payload(modules=MODULES)).id

    result = crud_course.course.update(
        gateway, course_id, course_payload(modules=[{"title": "Only", "lessons": [{"title": "One"}]}])
    )

    assert isinstance(result, Success)
    assert count_rows(gateway, CourseModule) == 1
    assert count_rows(gateway, CourseLesson) == 1


def test_course_update_without_modules_keeps_them(gateway):
    course_id = crud_course.course.create(gateway, course_payload(modules=MODULES)).id

    crud_course.course.update(gateway, course_id, course_payload(title="Python 101"))

    assert fetch_row(gateway, Course, course_id).title == "Python 101"
    assert count_rows(gateway, CourseModule, course_id=course_id) == 2
    assert count_rows(gateway, CourseLesson) == 3


def test_course_rejects_unknown_category(gateway):
    result = crud_course.course.create(gateway, course_payload(category="Programming"))

    assert isinstance(result, ValidationFailure)
    assert result.reasons[0].startswith("Category must be one of: programming, ")
    assert count_rows(gateway, Course) == 0


# --- Exams ---
def test_essay_question_gets_answer_template(gateway):
    questions = [
        {"questionText": "2 + 2?", "options": ["3", "4"], "correctAnswer": "4"},
        {"type": "essay", "content": "Explain closures.", "points": 10, "scoringCriteria": {"clarity": 5}},
        {"type": "coding", "content": "Reverse a list.", "scoringCriteria": {"ignored": True}},
    ]

    result = crud_exam.exam.create(gateway, exam_payload(questions=questions), created_by="admin_123")

    assert isinstance(result, Success)
    detail = projections.get_detail(gateway, crud_exam.EXAM_DEFINITION, result.id)
    assert [q["content"] for q in detail["questions"]] == ["2 + 2?", "Explain closures.", "Reverse a list."]
    assert detail["questions"][0]["options"] == ["3", "4"]
    assert detail["questions"][0]["answer_templates"] == []
    templates = detail["questions"][1]["answer_templates"]
    assert len(templates) == 1
    assert templates[0]["scoring_criteria"] == {"clarity": 5}
    assert templates[0]["exam_id"] == result.id
    assert detail["questions"][2]["answer_templates"] == []


def test_exam_question_replace_clears_templates(gateway):
    exam_id = crud_exam.exam.create(
        gateway,
        exam_payload(questions=[{"type": "essay", "content": "Why?", "scoringCriteria": {"depth": 3}}]),
    ).id

    result = crud_exam.exam.update(gateway, exam_id, exam_payload(questions=[{"content": "What?"}]))

    assert isinstance(result, Success)
    assert count_rows(gateway, ExamQuestion, exam_id=exam_id) == 1
    assert count_rows(gateway, ExamAnswerTemplate) == 0


def test_exam_end_before_start_is_rejected(gateway):
    result = crud_exam.exam.create(gateway, exam_payload(endTime="2025-10-01T08:00:00Z"))

    assert result == ValidationFailure(reasons=["End time must be after start time"])
    assert count_rows(gateway, Exam) == 0


# --- Competitions ---
def test_competition_with_problems(gateway):
    problems = [
        {"title": "Two Sum", "description": "Find a pair.", "difficulty": "Easy", "tags": ["arrays", "hashing"]},
        {"title": "Paths", "description": "Count paths.", "points": 300, "timeLimit": 2},
    ]

    result = crud_competition.competition.create(gateway, competition_payload(problems=problems))

    assert isinstance(result, Success)
    competition = fetch_row(gateway, Competition, result.id)
    assert competition.duration == 120
    assert competition.status == "draft"

    detail = projections.get_detail(gateway, crud_competition.COMPETITION_DEFINITION, result.id)
    # Highest-scoring problem first.
    assert [p["title"] for p in detail["problems"]] == ["Paths", "Two Sum"]
    assert detail["problems"][0]["points"] == 300
    assert detail["problems"][1]["tags"] == "arrays,hashing"
    assert detail["problems"][1]["difficulty"] == "easy"
    assert detail["participants"] == []


def test_competition_problem_errors_are_reported_together(gateway):
    result = crud_competition.competition.create(
        gateway,
        competition_payload(difficulty="extreme", problems=[{"title": "No description"}]),
    )

    assert result.reasons == [
        "Difficulty must be one of: easy, medium, hard",
        "problems[0].description: Field required",
    ]
    assert count_rows(gateway, CompetitionProblem) == 0


def test_competition_participants_are_ranked_by_score(gateway):
    competition_id = crud_competition.competition.create(gateway, competition_payload()).id
    with gateway.begin_transaction() as tx:
        for user_id, score in (("u1", 120), ("u2", 300), ("u3", 0)):
            tx.add(CompetitionParticipant(competition_id=competition_id, user_id=user_id, score=score))
        tx.commit()

    detail = projections.get_detail(gateway, crud_competition.COMPETITION_DEFINITION, competition_id)

    assert [p["user_id"] for p in detail["participants"]] == ["u2", "u1", "u3"]


def test_competition_update_leaves_participants_alone(gateway):
    competition_id = crud_competition.competition.create(gateway, competition_payload()).id
    with gateway.begin_transaction() as tx:
        tx.add(CompetitionParticipant(competition_id=competition_id, user_id="u1"))
        tx.commit()

    result = crud_competition.competition.update(
        gateway, competition_id, competition_payload(problems=[], participants=[])
    )

    assert isinstance(result, Success)
    assert count_rows(gateway, CompetitionParticipant, competition_id=competition_id) == 1


# --- Exam course references ---
def test_exam_for_missing_course_is_rejected(gateway):
    result = crud_exam.exam.create(gateway, exam_payload(courseId=999))

    assert result == ValidationFailure(reasons=["Course not found"])
    assert count_rows(gateway, Exam) == 0


def test_exam_for_deleted_course_is_rejected(gateway):
    course_id = crud_course.course.create(gateway, course_payload()).id
    exam_id = crud_exam.exam.create(gateway, exam_payload(courseId=course_id)).id
    crud_course.course.delete(gateway, course_id)

    assert crud_exam.exam.create(gateway, exam_payload(courseId=course_id)) == ValidationFailure(
        reasons=["Course not found"]
    )
    result = crud_exam.exam.update(gateway, exam_id, exam_payload(courseId=course_id, title="Renamed"))
    assert result == ValidationFailure(reasons=["Course not found"])
    assert fetch_row(gateway, Exam, exam_id).title == "Python Midterm"


def test_exam_linked_to_live_course(gateway):
    course_id = crud_course.course.create(gateway, course_payload()).id

    result = crud_exam.exam.create(gateway, exam_payload(courseId=course_id))

    assert isinstance(result, Success)
    assert fetch_row(gateway, Exam, result.id).course_id == course_id


def test_exam_update_keeps_stored_scores(gateway):
    exam_id = crud_exam.exam.create(gateway, exam_payload(totalPoints=50, passingScore=40)).id

    result = crud_exam.exam.update(gateway, exam_id, exam_payload(title="Python Final"))

    assert result == Success(id=exam_id)
    exam = fetch_row(gateway, Exam, exam_id)
    assert exam.title == "Python Final"
    assert (exam.total_points, exam.passing_score) == (50, 40)


def test_exam_update_lowering_total_below_stored_passing_score(gateway):
    exam_id = crud_exam.exam.create(gateway, exam_payload()).id

    result = crud_exam.exam.update(gateway, exam_id, exam_payload(totalPoints=50))

    assert result == ValidationFailure(reasons=["Passing score cannot exceed total points"])
    assert crud_exam.exam.update(
        gateway, exam_id, exam_payload(totalPoints=50, passingScore=30)
    ) == Success(id=exam_id)
