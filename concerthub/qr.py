from abc import ABC, abstractmethod
import base64
import io

import qrcode
from starlette.concurrency import run_in_threadpool


DATA_URL_PREFIX = "data:image/png;base64,"


# ----------------------------
# QR Renderer Interface
# ----------------------------
class QRRenderer(ABC):
    # data URL of an image encoding exactly `data`
    @abstractmethod
    async def to_data_url(self, data: str) -> str: ...


# ----------------------------
# qrcode + Pillow implementation
# ----------------------------
class PngQRRenderer(QRRenderer):

    def __init__(self, box_size: int = 4, border: int = 4) -> None:
        self.box_size = box_size
        self.border = border

    def render_png(self, data: str) -> bytes:
        qr = qrcode.QRCode(
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=self.box_size,
            border=self.border,
        )
        qr.add_data(data)
        qr.make(fit=True)
        img = qr.make_image(fill_color="black", back_color="white")
        buf = io.BytesIO()
        img.save(buf)
        return buf.getvalue()

    def make_data_url(self, data: str) -> str:
        png = self.render_png(data)
        return DATA_URL_PREFIX + base64.b64encode(png).decode()

    async def to_data_url(self, data: str) -> str:
        # Pillow work is CPU bound; keep it off the event loop
        return await run_in_threadpool(self.make_data_url, data)
