"""
Background Workers (Threading)
==============================
This module contains QThread subclasses for handling long-running tasks.

Why is this file needed?
------------------------
1. Responsiveness: Decoding a large photo on the main thread would freeze the
   viewport animation. These classes push the work to a background thread.
2. Signals: They provide a safe way to hand results back to the GUI thread
   using Qt Signals (queued across threads).

Classes:
    ImageDecodeWorker: Decodes one ImageSubmission into an ImageHandle.
"""
import logging
from PySide6.QtCore import QObject, QThread, Signal

from hologen.model.image import ImageSubmission, ImageDecodeError, decode_image

logger = logging.getLogger(__name__)


class ImageDecodeWorker(QThread):
    # Signals to update the UI from the background
    decoded = Signal(object)  # ImageHandle
    error_occurred = Signal(str)

    def __init__(self, submission: ImageSubmission, parent: QObject | None = None):
        super().__init__(parent)
        self.submission = submission

    def run(self):
        try:
            logger.info(f"Decoding '{self.submission.name}' in background thread...")
            image = decode_image(self.submission.data, name=self.submission.name)
            self.decoded.emit(image)

        except ImageDecodeError as e:
            logger.error(f"Error in ImageDecodeWorker: {e}")
            self.error_occurred.emit(str(e))

        except Exception as e:
            # Anything else must still release the session, which waits for one of the two signals
            logger.exception(f"Unexpected error while decoding '{self.submission.name}'")
            self.error_occurred.emit(f"Cannot decode '{self.submission.name}': {e}")
