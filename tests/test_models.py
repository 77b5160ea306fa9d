"""Tests für Notenschema und Datenmodell (Course, Student)."""

import pytest

from data.sample_data import sample_students
from models.course import Course
from models.grading import GRADE_LETTERS, PASS_MARK, grade_letter, passed
from models.student import Student, average, grade_letter_for, passed_for


# ─── NOTENSCHEMA ──────────────────────────────────────────────────────────────

class TestGradingPolicy:
    @pytest.mark.parametrize("avg, expected", [
        (100.0, "A+"),
        (90.0, "A+"),
        (89.999, "A"),
        (80.0, "A"),
        (79.99, "B"),
        (70.0, "B"),
        (60.0, "C"),
        (50.0, "D"),
        (49.5, "E"),
        (40.0, "E"),
        (39.999, "F"),
        (0.0, "F"),
    ])
    def test_grade_boundaries(self, avg, expected):
        """Schwellen sind inklusive und werden von oben nach unten geprüft."""
        assert grade_letter(avg) == expected

    def test_out_of_range_values_accepted(self):
        """Werte außerhalb 0–100 werden klassifiziert, nicht abgelehnt."""
        assert grade_letter(150.0) == "A+"
        assert grade_letter(-5.0) == "F"

    def test_grade_letter_always_known(self):
        for avg in [x * 0.5 for x in range(-10, 220)]:
            assert grade_letter(avg) in GRADE_LETTERS

    def test_grade_letters_order(self):
        assert GRADE_LETTERS == ("A+", "A", "B", "C", "D", "E", "F")

    def test_passed_boundary(self):
        assert PASS_MARK == 40.0
        assert passed(40.0) is True
        assert passed(39.99) is False
        assert passed(75.0) is True


# ─── DURCHSCHNITT ─────────────────────────────────────────────────────────────

class TestAverage:
    def test_empty_is_zero(self):
        """Ohne Fächer ist der Durchschnitt 0.0 (keine Division durch Null)."""
        assert average([]) == 0.0
        assert grade_letter_for([]) == "F"
        assert passed_for([]) is False

    def test_mean_of_marks(self):
        courses = [Course(name="A", marks=50.0), Course(name="B", marks=70.0),
                   Course(name="C", marks=90.0)]
        assert average(courses) == pytest.approx(70.0)
        assert grade_letter_for(courses) == "B"
        assert passed_for(courses) is True

    def test_single_course(self):
        assert average([Course(name="Ma", marks=33.0)]) == 33.0


# ─── MODELLE ──────────────────────────────────────────────────────────────────

class TestModels:
    def test_course_grade_letter(self):
        """Course.grade_letter bewertet die eigene Punktzahl."""
        assert Course(name="Physics", marks=78.5).grade_letter == "B"

    def test_student_without_courses(self):
        s = Student(id="S9", name="Leer", age=17)
        assert s.courses == ()
        assert s.average == 0.0
        assert s.grade_letter == "F"
        assert not s.passed

    def test_student_is_immutable(self):
        """Direkte Zuweisung ist verboten; Änderungen über model_copy."""
        s = Student(id="S1", name="A", age=20, courses=[Course(name="Ma", marks=80)])
        with pytest.raises(Exception):
            s.name = "B"
        updated = s.model_copy(update={"name": "B"})
        assert updated.name == "B"
        assert s.name == "A"

    def test_course_is_immutable(self):
        c = Course(name="Ma", marks=80.0)
        with pytest.raises(Exception):
            c.marks = 90.0

    def test_courses_keep_order(self):
        s = Student(id="S1", name="A", age=20, courses=[
            Course(name="Z", marks=1.0), Course(name="A", marks=2.0),
        ])
        assert [c.name for c in s.courses] == ["Z", "A"]


# ─── BEISPIELDATEN ────────────────────────────────────────────────────────────

class TestSampleStudents:
    def test_sample_averages_and_grades(self):
        """Die drei Beispiel-Schüler: 85.33 (A), 91.17 (A+), 58.50 (D)."""
        john, jane, alex = sample_students()

        assert john.average == pytest.approx(256.0 / 3)
        assert round(john.average, 2) == 85.33
        assert john.grade_letter == "A"
        assert john.passed

        assert jane.average == pytest.approx(273.5 / 3)
        assert round(jane.average, 2) == 91.17
        assert jane.grade_letter == "A+"
        assert jane.passed

        assert alex.average == pytest.approx(58.5)
        assert alex.grade_letter == "D"
        assert alex.passed  # 58.5 >= 40

    def test_sample_ids_unique(self):
        ids = [s.id for s in sample_students()]
        assert ids == ["S001", "S002", "S003"]
