from datetime import date

import pytest
from certgen.config import CertgenConfig
from certgen.engine.form import (
    CertificateData,
    SubmissionError,
    build_certificate,
    certificate_filename,
    certificate_lines,
    course_label,
    format_date,
    validate_submission,
    MSG_COURSE_REQUIRED,
    MSG_COURSE_UNKNOWN,
    MSG_CPF_INVALID,
    MSG_CPF_REQUIRED,
    MSG_EMAIL_INVALID,
    MSG_EMAIL_REQUIRED,
    MSG_NAME_REQUIRED,
)


@pytest.fixture
def courses():
    return CertgenConfig().courses


GOOD = dict(cpf="529.982.247-25", name="Maria da Silva", email="maria@example.com", course_type="curso-react")


@pytest.mark.parametrize("override,message", [
    (dict(cpf=""), MSG_CPF_REQUIRED),
    (dict(cpf="   "), MSG_CPF_REQUIRED),
    (dict(cpf="123.456.789-00"), MSG_CPF_INVALID),
    (dict(name=""), MSG_NAME_REQUIRED),
    (dict(email=None), MSG_EMAIL_REQUIRED),
    (dict(email="maria@example"), MSG_EMAIL_INVALID),
    (dict(course_type=""), MSG_COURSE_REQUIRED),
    (dict(course_type="curso-cobol"), MSG_COURSE_UNKNOWN),
])
def test_single_failing_field(courses, override, message):
    fields = {**GOOD, **override}
    assert validate_submission(courses=courses, **fields) == message


def test_checks_run_in_form_order(courses):
    # Everything is wrong; the CPF is reported first.
    assert validate_submission("", "", "", "", courses) == MSG_CPF_REQUIRED
    # Valid CPF, everything else empty: the name is next.
    assert validate_submission(GOOD["cpf"], "", "bad", "", courses) == MSG_NAME_REQUIRED
    assert validate_submission(GOOD["cpf"], "Maria", "bad", "", courses) == MSG_EMAIL_INVALID


def test_valid_submission(courses):
    assert validate_submission(courses=courses, **GOOD) is None


def test_build_certificate_canonicalizes(courses):
    data = build_certificate(
        " 529.982.247-25 ", "  Maria da Silva ", " maria@example.com", "curso-react",
        courses, today=date(2024, 3, 5),
    )
    assert data == CertificateData(
        cpf="52998224725",
        name="Maria da Silva",
        email="maria@example.com",
        course_type="curso-react",
        generated_date=date(2024, 3, 5),
    )


def test_build_certificate_defaults_to_today(courses):
    data = build_certificate(courses=courses, **GOOD)
    assert data.generated_date == date.today()


def test_build_certificate_raises_with_message(courses):
    with pytest.raises(SubmissionError, match=MSG_CPF_INVALID):
        build_certificate("11111111111", "Maria", "maria@example.com", "curso-react", courses)
    assert issubclass(SubmissionError, ValueError)


def test_course_label(courses):
    assert course_label("workshop-ux", courses) == "Workshop de UX/UI Design"
    assert course_label("nope", courses) == "Certificado"
    assert course_label("nope", courses, fallback="Evento") == "Evento"


def test_format_date():
    assert format_date(date(2024, 3, 5)) == "05/03/2024"


@pytest.mark.parametrize("name,expected", [
    ("Maria da Silva", "certificado-maria-da-silva.pdf"),
    ("  João   Pedro\tSouza ", "certificado-joão-pedro-souza.pdf"),
])
def test_certificate_filename(name, expected):
    assert certificate_filename(name) == expected


def test_certificate_filename_extension():
    assert certificate_filename("Ana", "png") == "certificado-ana.png"


def test_certificate_lines(courses):
    data = build_certificate(courses=courses, today=date(2024, 3, 5), **GOOD)
    lines = list(certificate_lines(data, courses, workload_hours=40))
    assert lines == [
        ("kicker", "Certificado de Conclusão"),
        ("title", "Curso de React"),
        ("body", "Certificamos que"),
        ("name", "Maria da Silva"),
        ("body", "portador(a) do CPF 529.982.247-25"),
        ("body", "participou e concluiu com sucesso o"),
        ("highlight", "Curso de React"),
        ("body", "com carga horária total de 40 horas."),
        ("footer", "Documento emitido em 05/03/2024"),
        ("signature", "Assinatura do Responsável"),
    ]


@pytest.mark.parametrize("name", ["x/../y", "../../etc/passwd", "a\\b", "..hidden"])
def test_certificate_filename_stays_in_directory(name):
    filename = certificate_filename(name)
    assert "/" not in filename
    assert "\\" not in filename
    assert filename.startswith("certificado-")
    assert not filename.startswith("certificado-.")


def test_certificate_filename_replaces_separators():
    assert certificate_filename("x/../y") == "certificado-x-..-y.pdf"
