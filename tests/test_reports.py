from notices.reports import notice_history_pdf


def test_empty_history_still_renders(db):
    assert notice_history_pdf("Estudiante: Luis Gómez", []).startswith(b"%PDF")


def test_long_reasons_wrap_across_pages(student, teacher, make_notice):
    notices = [make_notice(student, teacher, "palabra " * 400, minutes_ago=i) for i in range(3)]
    pdf = notice_history_pdf("Todas las amonestaciones", notices, show_student=True)
    assert pdf.startswith(b"%PDF")
    # "/Type /Pages" plus one "/Type /Page" per page
    assert pdf.count(b"/Type /Page") > 2
