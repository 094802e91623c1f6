from hologen.controller.workers import ImageDecodeWorker
from hologen.model.image import ImageHandle, ImageSubmission


def test_worker_emits_decoded_image(qtbot, image_submission):
    worker = ImageDecodeWorker(image_submission)

    with qtbot.waitSignal(worker.decoded, timeout=5000) as blocker:
        worker.start()
    worker.wait()

    image = blocker.args[0]
    assert isinstance(image, ImageHandle)
    assert image.name == "photo.png"
    assert image.pixels.shape == (100, 100, 4)
    assert tuple(image.pixels[0, 0]) == (200, 40, 10, 255)


def test_worker_reports_undecodable_bytes(qtbot):
    worker = ImageDecodeWorker(ImageSubmission("broken.jpg", "image/jpeg", b"\x00\x01\x02"))
    decoded = []
    worker.decoded.connect(decoded.append)

    with qtbot.waitSignal(worker.error_occurred, timeout=5000) as blocker:
        worker.start()
    worker.wait()

    assert "broken.jpg" in blocker.args[0]
    assert decoded == []
