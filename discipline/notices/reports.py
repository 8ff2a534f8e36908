from io import BytesIO

from django.conf import settings
from django.utils import timezone
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas


def notice_history_pdf(title: str, notices, show_student: bool = False) -> bytes:
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    width, height = A4

    c.setFont("Helvetica-Bold", 16)
    c.drawString(40, height - 60, f"{settings.SCHOOL_NAME} - Historial de Amonestaciones")

    c.setFont("Helvetica", 11)
    c.drawString(40, height - 85, title)
    c.drawString(40, height - 105, f"Generado: {timezone.localtime():%Y-%m-%d %H:%M}")

    y = height - 145
    if not notices:
        c.drawString(40, y, "- No hay amonestaciones registradas.")
    for n in notices:
        when = timezone.localtime(n.created_at)
        head = f"{when:%d/%m/%Y}"
        if show_student:
            head += f" - {n.student_name}"
        head += f" (registrada por {n.teacher_name})"
        c.setFont("Helvetica-Bold", 11)
        y = _draw_wrapped(c, head, 40, y, width - 80, "Helvetica-Bold")
        c.setFont("Helvetica", 11)
        y = _draw_wrapped(c, n.reason, 52, y, width - 92, "Helvetica")
        y -= 8

    c.save()
    pdf = buf.getvalue()
    buf.close()
    return pdf


def _draw_wrapped(c, text, x, y, max_width, font):
    words = text.split()
    line = ""
    for w in words:
        test = (line + " " + w).strip()
        if c.stringWidth(test, font, 11) <= max_width:
            line = test
        else:
            c.drawString(x, y, line)
            y -= 14
            line = w
            if y < 60:
                c.showPage()
                y = 780
                c.setFont(font, 11)
    if line:
        c.drawString(x, y, line)
        y -= 14
    if y < 60:
        c.showPage()
        y = 780
        c.setFont(font, 11)
    return y
