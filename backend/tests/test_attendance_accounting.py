"""
Tests unitaires des calculs de présence et de séances restantes (fonctions pures).
"""

from datetime import timezone

import pytest

from app.schemas.attendance import SortMode, StatusCounts
from app.schemas.event import AttendanceStatus
from app.services.attendance_accounting import (
    compute_student_stats,
    count_statuses,
    rank_students,
    search_students,
)
from factories import BASE_DATE, attendee, enrollment, events_with_statuses, make_event, make_student


# --- Valeurs par défaut ---

def test_eleve_sans_inscription():
    stats = compute_student_stats(make_student(enrollments=None), [])
    assert stats.course_stats == []
    assert stats.total_remaining == 0
    assert stats.total_classes == 0
    assert stats.has_completed_courses is False
    assert stats.status_counts == StatusCounts()


def test_seance_sans_participants_ignoree():
    student = make_student(enrollments=[enrollment()])
    stats = compute_student_stats(student, [make_event("e1", attendees=None)])
    assert stats.attendance_records == []
    assert stats.course_stats[0].sessions_used == 0


def test_statut_absent_devient_pending():
    student = make_student()
    event = make_event("e1", attendees=[{"student_id": "s1", "student_name": "Alice", "status": None}])
    stats = compute_student_stats(student, [event])
    assert stats.attendance_records[0].status is AttendanceStatus.PENDING
    assert stats.status_counts.pending == 1


# --- Scénarios concrets ---

def test_scenario_quatre_seances():
    """present, present, absent, excused sur 5 séances achetées → 3 utilisées, 2 restantes."""
    student = make_student(enrollments=[enrollment(total_purchased=5)])
    events = events_with_statuses(["present", "present", "absent", "excused"])

    stats = compute_student_stats(student, events)

    course = stats.course_stats[0]
    assert course.sessions_used == 3
    assert course.sessions_remaining == 2
    assert stats.status_counts == StatusCounts(present=2, absent=1, excused=1, pending=0)
    assert stats.has_completed_courses is False
    assert stats.total_classes == 4
    assert stats.total_remaining == 2


def test_scenario_cinquieme_puis_sixieme_seance():
    student = make_student(enrollments=[enrollment(total_purchased=5)])
    events = events_with_statuses(["present", "present", "absent", "excused", "present"])

    stats = compute_student_stats(student, events)
    assert stats.course_stats[0].sessions_used == 4
    assert stats.course_stats[0].sessions_remaining == 1
    assert stats.has_completed_courses is False

    events += events_with_statuses(["absent"], start=5)
    stats = compute_student_stats(student, events)
    assert stats.course_stats[0].sessions_used == 5
    assert stats.course_stats[0].sessions_remaining == 0
    assert stats.has_completed_courses is True


def test_deux_inscriptions_une_terminee():
    """Un seul cours terminé suffit pour has_completed_courses ; le total additionne les deux."""
    student = make_student(enrollments=[
        enrollment("c1", total_purchased=2),
        enrollment("c2", total_purchased=10, course_name="Violon"),
    ])
    events = (
        events_with_statuses(["present", "absent"], course_id="c1")
        + events_with_statuses(["present"], course_id="c2", start=10)
    )

    stats = compute_student_stats(student, events)

    by_course = {c.course_id: c for c in stats.course_stats}
    assert by_course["c1"].sessions_remaining == 0
    assert by_course["c2"].sessions_remaining == 9
    assert stats.total_remaining == 9
    assert stats.has_completed_courses is True


# --- Règles de décompte ---

@pytest.mark.parametrize("status,used", [
    ("present", 1),
    ("absent", 1),
    ("excused", 0),
    ("pending", 0),
])
def test_seuls_present_et_absent_decomptent(status, used):
    student = make_student(enrollments=[enrollment(total_purchased=3)])
    stats = compute_student_stats(student, events_with_statuses([status]))
    assert stats.course_stats[0].sessions_used == used


def test_seances_restantes_jamais_negatives():
    student = make_student(enrollments=[enrollment(total_purchased=1)])
    stats = compute_student_stats(student, events_with_statuses(["present"] * 4))
    course = stats.course_stats[0]
    assert course.sessions_used == 4
    assert course.sessions_remaining == 0


def test_inscription_a_zero_seance_est_terminee():
    student = make_student(enrollments=[enrollment(total_purchased=0)])
    stats = compute_student_stats(student, [])
    assert stats.course_stats[0].sessions_remaining == 0
    assert stats.has_completed_courses is True


def test_seances_d_un_autre_cours_non_decomptees():
    student = make_student(enrollments=[enrollment("c1", total_purchased=5)])
    events = events_with_statuses(["present", "present"], course_id="c2")
    stats = compute_student_stats(student, events)
    assert stats.course_stats[0].sessions_used == 0
    # ... mais elles figurent dans l'historique
    assert stats.total_classes == 2


def test_presence_des_autres_eleves_ignoree():
    student = make_student(enrollments=[enrollment(total_purchased=5)])
    event = make_event("e1", attendees=[attendee("s2", "present", "Bob"), attendee("s1", "excused")])
    stats = compute_student_stats(student, [event])
    assert stats.course_stats[0].sessions_used == 0
    assert stats.attendance_records[0].status is AttendanceStatus.EXCUSED


# --- Historique ---

def test_historique_du_plus_recent_au_plus_ancien():
    student = make_student()
    events = [
        make_event("old", attendees=[attendee()], days=0),
        make_event("new", attendees=[attendee()], days=20),
        make_event("mid", attendees=[attendee()], days=10),
    ]
    stats = compute_student_stats(student, events)
    assert [r.event.id for r in stats.attendance_records] == ["new", "mid", "old"]
    assert stats.attendance_records[0].date == events[1].date_time


def test_historique_tri_stable_a_date_egale():
    student = make_student()
    events = [
        make_event("a", attendees=[attendee()], date_time=BASE_DATE),
        make_event("b", attendees=[attendee()], date_time=BASE_DATE),
        make_event("later", attendees=[attendee()], days=1),
        make_event("c", attendees=[attendee()], date_time=BASE_DATE),
    ]
    stats = compute_student_stats(student, events)
    assert [r.event.id for r in stats.attendance_records] == ["later", "a", "b", "c"]


def test_date_sans_fuseau_interpretee_en_utc():
    event = make_event("e1", attendees=[attendee()], date_time=BASE_DATE.replace(tzinfo=None))
    assert event.date_time.tzinfo == timezone.utc


# --- Pureté ---

def test_calcul_idempotent():
    student = make_student(enrollments=[enrollment(total_purchased=5)])
    events = events_with_statuses(["present", "absent", "pending"])
    assert compute_student_stats(student, events) == compute_student_stats(student, events)


def test_entrees_non_modifiees():
    student = make_student(enrollments=[enrollment(total_purchased=5)])
    events = events_with_statuses(["present", "absent"])
    before_student = student.model_dump()
    before_events = [e.model_dump() for e in events]
    order = [e.id for e in events]

    compute_student_stats(student, events)

    assert student.model_dump() == before_student
    assert [e.model_dump() for e in events] == before_events
    assert [e.id for e in events] == order


def test_count_statuses_couvre_tous_les_statuts():
    counts = count_statuses([AttendanceStatus.PRESENT, AttendanceStatus.PRESENT, AttendanceStatus.PENDING])
    assert counts == StatusCounts(present=2, absent=0, excused=0, pending=1)


# --- rank_students ---

def _stats(student_id, purchased, used):
    student = make_student(student_id, name=student_id.upper(), enrollments=[enrollment(total_purchased=purchased)])
    events = events_with_statuses(["present"] * used, student_id=student_id)
    return compute_student_stats(student, events)


@pytest.fixture
def ranked_input():
    # restant : a=3, b=0 (terminé), c=7, d=0 (terminé)
    return [_stats("a", 5, 2), _stats("b", 2, 2), _stats("c", 7, 0), _stats("d", 1, 3)]


def test_rank_remaining_desc(ranked_input):
    result = rank_students(ranked_input, SortMode.REMAINING_DESC)
    assert [s.student.id for s in result] == ["c", "a", "b", "d"]


def test_rank_remaining_asc(ranked_input):
    result = rank_students(ranked_input, SortMode.REMAINING_ASC)
    assert [s.student.id for s in result] == ["b", "d", "a", "c"]


def test_rank_completed_partition_stable(ranked_input):
    result = rank_students(ranked_input, SortMode.COMPLETED)
    assert [s.student.id for s in result] == ["b", "d", "a", "c"]
    flags = [s.has_completed_courses for s in result]
    assert flags == sorted(flags, reverse=True)


def test_rank_none_conserve_l_ordre(ranked_input):
    result = rank_students(ranked_input, SortMode.NONE)
    assert [s.student.id for s in result] == ["a", "b", "c", "d"]
    assert result is not ranked_input


def test_rank_ne_modifie_pas_l_entree(ranked_input):
    order = [s.student.id for s in ranked_input]
    rank_students(ranked_input, SortMode.REMAINING_ASC)
    assert [s.student.id for s in ranked_input] == order


# --- search_students ---

def test_search_insensible_a_la_casse(ranked_input):
    result = search_students(ranked_input, "  c ")
    assert [s.student.id for s in result] == ["c"]


def test_search_vide_retourne_tout(ranked_input):
    assert len(search_students(ranked_input, "")) == 4
    assert len(search_students(ranked_input, None)) == 4


@pytest.mark.parametrize("status,consumes", [
    (AttendanceStatus.PRESENT, True),
    (AttendanceStatus.ABSENT, True),
    (AttendanceStatus.EXCUSED, False),
    (AttendanceStatus.PENDING, False),
])
def test_statuts_qui_decomptent_une_seance(status, consumes):
    assert status.consumes_session is consumes
