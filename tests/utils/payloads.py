# tests/utils/payloads.py
"""Valid create payloads for each aggregate kind."""


def event_payload(**overrides) -> dict:
    payload = {
        "title": "Hack Day",
        "description": "A day of building things.",
        "category": "Hackathon",
        "eventdate": "2025-09-01",
        "eventtime": "09:30",
    }
    payload.update(overrides)
    return payload


def course_payload(**overrides) -> dict:
    payload = {
        "title": "Intro to Python",
        "description": "Variables, loops and functions.",
        "category": "programming",
        "level": "Beginner",
        "imageUrl": "https://cdn.example.com/python.png",
        "videoUrl": "https://cdn.example.com/python.mp4",
    }
    payload.update(overrides)
    return payload


def exam_payload(**overrides) -> dict:
    payload = {
        "title": "Python Midterm",
        "type": "mixed",
        "duration": "90",
        "startTime": "2025-10-01T09:00:00Z",
        "endTime": "2025-10-01T10:30:00Z",
    }
    payload.update(overrides)
    return payload


def competition_payload(**overrides) -> dict:
    payload = {
        "title": "Autumn Code Sprint",
        "description": "Three problems, two hours.",
        "startTime": "2025-11-01T10:00:00Z",
        "endTime": "2025-11-01T12:00:00Z",
        "difficulty": "Medium",
    }
    payload.update(overrides)
    return payload
