# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Preview server for inlined webview resources.

Serves the initial webview HTML with inlined stylesheets and icons, plus
the images base location that non-inlined icons fall back to.
"""

from webinline.preview.server import PreviewServer


__all__ = [
    "PreviewServer",
]
