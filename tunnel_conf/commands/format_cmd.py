import argparse

import qrcode
from qrcode.image.styledpil import StyledPilImage
from qrcode.image.styles.colormasks import HorizontalGradiantColorMask
from qrcode.image.styles.moduledrawers import RoundedModuleDrawer

from ..common import add_file_arg, require_and_load_tunnel, write_output
from ..writer import to_wg_quick


def add_format_cmd(subparsers: argparse._SubParsersAction) -> None:
    f = subparsers.add_parser(
        "format",
        help="Re-emit a tunnel configuration in canonical wg-quick form",
        description="Parses a tunnel configuration and writes it back in canonical form.",
    )
    add_file_arg(f)
    f.add_argument("-o", "--output", default=None, help="Write to this file instead of stdout")
    f.add_argument("--overwrite", action="store_true", help="Overwrite output file if it exists")
    f.add_argument("--qr", default=None, metavar="PNG", help="Also render the configuration as a QR code PNG")
    f.set_defaults(func=run_format_cmd)


def run_format_cmd(args: argparse.Namespace) -> int:
    cfg = require_and_load_tunnel(args)
    if cfg is None:
        return 2
    text = to_wg_quick(cfg)
    rc = write_output(text, getattr(args, "output", None), overwrite=bool(getattr(args, "overwrite", False)))
    qr_path = getattr(args, "qr", None)
    if rc == 0 and qr_path:
        write_qr(text, qr_path)
    return rc


def write_qr(text: str, path: str) -> None:
    qr = qrcode.QRCode(error_correction=qrcode.constants.ERROR_CORRECT_Q)
    qr.add_data(text)
    qr.make(fit=True)
    color_mask = HorizontalGradiantColorMask(
        back_color=(255, 255, 255),
        left_color=(128, 0, 255),
        right_color=(0, 123, 255),
    )
    img = qr.make_image(
        image_factory=StyledPilImage,
        module_drawer=RoundedModuleDrawer(),
        color_mask=color_mask,
    )
    img.save(path)
