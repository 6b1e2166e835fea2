# Copyright (c) 2009-2010 Six Apart Ltd.
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# * Redistributions of source code must retain the above copyright notice,
#   this list of conditions and the following disclaimer.
#
# * Redistributions in binary form must reproduce the above copyright notice,
#   this list of conditions and the following disclaimer in the documentation
#   and/or other materials provided with the distribution.
#
# * Neither the name of Six Apart Ltd. nor the names of its contributors may
#   be used to endorse or promote products derived from this software without
#   specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE
# ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE
# LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR
# CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF
# SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS
# INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN
# CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE)
# ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.

"""

Binary attachments for model fields.

StackMob stores files by having the client send a small MIME-style block
as the value of an ordinary string field. The block names the content type
and file name and carries the file's bytes base64 encoded:

    Content-Type: image/png
    Content-Disposition: attachment; filename=avatar.png
    Content-Transfer-Encoding: base64

    iVBORw0KGgo...

Assign a `File` to any field of a model. Files are formatted before the
rest of the model is serialized, so they never go through field
classification.

"""

import base64


class BinaryFieldFormatter(object):

    """Formats raw bytes as the attachment block StackMob expects."""

    def __init__(self, content_type, filename, data):
        self.content_type = content_type
        self.filename = filename
        self.data = data

    def json_value(self):
        encoded = base64.b64encode(bytes(self.data)).decode('ascii')
        return ''.join((
            'Content-Type: %s\n' % self.content_type,
            'Content-Disposition: attachment; filename=%s\n' % self.filename,
            'Content-Transfer-Encoding: base64\n\n',
            encoded,
        ))


class File(object):

    """A file to upload as the value of a model field."""

    def __init__(self, content_type, filename, data):
        self.value = BinaryFieldFormatter(content_type, filename, data).json_value()

    def __str__(self):
        return self.value

    def __eq__(self, other):
        return isinstance(other, File) and self.value == other.value

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(self.value)
