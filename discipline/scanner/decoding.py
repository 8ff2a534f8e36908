"""
Camera and barcode decoder adapters.

OpenCV and pyzbar are only needed on machines that actually scan cards, so
they are imported when first used.
"""
import logging

logger = logging.getLogger(__name__)


class CameraUnavailable(Exception):
    pass


def open_camera(index: int = 0):
    import cv2

    cap = cv2.VideoCapture(index)
    if not cap.isOpened():
        cap.release()
        raise CameraUnavailable(f"camera {index} could not be opened")
    return cap


def decode_frame(frame):
    """Text of the first barcode found in ``frame`` (ndarray or PIL image)."""
    from pyzbar.pyzbar import decode

    for symbol in decode(frame):
        return symbol.data.decode("utf-8").strip()
    return None


def decode_image(fileobj):
    """Decode a still photo of a card, e.g. an uploaded file."""
    from PIL import Image

    with Image.open(fileobj) as img:
        code = decode_frame(img.convert("L"))
    logger.debug("Decoded image %s -> %r", getattr(fileobj, "name", "<upload>"), code)
    return code
