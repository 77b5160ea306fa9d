"""Tests für die Klassenstatistik."""

import pytest

from analysis.class_statistics import ClassAnalyzer, ClassStatistics
from data.sample_data import sample_students
from models.course import Course
from models.student import Student


def _student(sid: str, avg: float, name: str = "") -> Student:
    return Student(id=sid, name=name or sid, age=20,
                   courses=[Course(name="Ma", marks=avg)])


class TestClassAnalyzer:
    def test_empty_raises(self):
        with pytest.raises(ValueError):
            ClassAnalyzer().analyze([])

    def test_sample_statistics(self):
        stats = ClassAnalyzer().analyze(sample_students())
        assert isinstance(stats, ClassStatistics)
        assert stats.total_students == 3
        assert stats.class_average == pytest.approx(235.0 / 3)
        assert stats.pass_count == 3
        assert stats.pass_rate == pytest.approx(100.0)
        assert [p.student_id for p in stats.top_performers] == ["S002", "S001", "S003"]
        assert [p.rank for p in stats.top_performers] == [1, 2, 3]

    def test_class_average_is_mean_of_student_averages(self):
        """Nicht gewichtet nach Anzahl Fächer."""
        a = Student(id="A", name="A", age=1, courses=[
            Course(name="x", marks=100.0), Course(name="y", marks=100.0),
            Course(name="z", marks=100.0),
        ])
        b = _student("B", 40.0)
        stats = ClassAnalyzer().analyze([a, b])
        assert stats.class_average == pytest.approx(70.0)

    def test_top_n_and_ties_keep_input_order(self):
        students = [_student("S1", 80.0), _student("S2", 90.0),
                    _student("S3", 80.0), _student("S4", 10.0)]
        stats = ClassAnalyzer().analyze(students, top_n=3)
        assert [p.student_id for p in stats.top_performers] == ["S2", "S1", "S3"]

    def test_distribution_has_all_buckets(self):
        students = [_student(f"S{i}", m) for i, m in enumerate([95, 85, 85, 30, 45, 61])]
        stats = ClassAnalyzer().analyze(students)
        grades = [b.grade for b in stats.grade_distribution]
        counts = {b.grade: b.count for b in stats.grade_distribution}
        assert grades == ["A+", "A", "B", "C", "D", "E", "F"]
        assert counts == {"A+": 1, "A": 2, "B": 0, "C": 1, "D": 0, "E": 1, "F": 1}
        assert sum(b.percentage for b in stats.grade_distribution) == pytest.approx(100.0)

    def test_pass_rate(self):
        students = [_student("S1", 39.99), _student("S2", 40.0),
                    _student("S3", 70.0), _student("S4", 0.0)]
        stats = ClassAnalyzer().analyze(students)
        assert stats.pass_count == 2
        assert stats.pass_rate == pytest.approx(50.0)

    def test_subject_averages(self):
        stats = ClassAnalyzer().analyze(sample_students())
        by_subject = {sa.subject: sa for sa in stats.subject_averages}
        assert list(by_subject) == ["Mathematics", "Computer Science", "Physics"]
        assert by_subject["Mathematics"].average == pytest.approx(238.0 / 3)
        assert by_subject["Computer Science"].average == pytest.approx(245.5 / 3)
        assert by_subject["Physics"].participants == 3

    def test_students_by_grade(self):
        stats = ClassAnalyzer().analyze(sample_students())
        assert stats.students_by_grade == {
            "A": ["John Doe"], "A+": ["Jane Smith"], "D": ["Alex Brown"],
        }

    def test_print_rich_runs(self, capsys):
        analyzer = ClassAnalyzer()
        analyzer.print_rich(analyzer.analyze(sample_students()))
        out = capsys.readouterr().out
        assert "Jane Smith" in out
        assert "Notenverteilung" in out
