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

import threading
import unittest

import mock

from stackmob import fields, metadata
from stackmob.errors import ConfigurationError
from stackmob.model import Model
from tests import utils


class TestNames(unittest.TestCase):

    def test_valid(self):
        metadata.ensure_valid_name('simple', 'model')
        metadata.ensure_valid_name('abc', 'field')
        metadata.ensure_valid_name('a' * 25, 'field')
        metadata.ensure_valid_name('Field42', 'field')

    def test_invalid(self):
        for name in ('ab', 'a' * 26, 'foo_bar', 'foo-bar', 'foo bar', '',
                     'caf\u00e9s', 'stra\u00dfe', '\u0661\u0662\u0663'):
            self.assertRaises(ConfigurationError,
                              metadata.ensure_valid_name, name, 'field')

    def test_message(self):
        try:
            metadata.ensure_valid_name('my_field', 'field')
        except ConfigurationError as exc:
            self.assertTrue('my_field' in str(exc))
            self.assertTrue('field' in str(exc))
        else:
            self.fail('No ConfigurationError for my_field')


class TestClassify(unittest.TestCase):

    def test_kinds(self):
        cls = utils.Complicated
        self.assertEqual(metadata.classify(cls, 'number'), metadata.PRIMITIVE)
        self.assertEqual(metadata.classify(cls, 'flag'), metadata.PRIMITIVE)
        self.assertEqual(metadata.classify(cls, 'name'), metadata.PRIMITIVE)
        self.assertEqual(metadata.classify(cls, 'point'), metadata.OBJECT)
        self.assertEqual(metadata.classify(cls, 'strings'), metadata.PRIMITIVE_ARRAY)
        self.assertEqual(metadata.classify(cls, 'points'), metadata.OBJECT_ARRAY)
        self.assertEqual(metadata.classify(cls, 'subobject'), metadata.MODEL)
        self.assertEqual(metadata.classify(cls, 'subobjects'), metadata.MODEL_ARRAY)

    def test_untyped_field(self):
        self.assertEqual(metadata.classify(utils.Simple, 'foo'), metadata.PRIMITIVE)
        self.assertEqual(metadata.classify(utils.Book, 'author'), metadata.MODEL)
        self.assertEqual(metadata.classify(utils.Library, 'books'), metadata.MODEL_ARRAY)

    def test_bytes_are_object_arrays(self):
        self.assertEqual(metadata.classify(utils.Complicated, 'raw'),
                         metadata.OBJECT_ARRAY)

    def test_model_typed_fields(self):

        class Shelf(Model):
            book  = fields.Field(type=utils.Book)
            books = fields.List(fields.Field(type=utils.Book))

        self.assertEqual(metadata.classify(Shelf, 'book'), metadata.MODEL)
        self.assertEqual(metadata.classify(Shelf, 'books'), metadata.MODEL_ARRAY)

    def test_unknown_field(self):
        self.assertTrue(metadata.classify(utils.Simple, 'nonesuch') is None)

    def test_api_name(self):

        class Renamed(Model):
            title = fields.Field(api_name='heading')

        self.assertEqual(metadata.classify(Renamed, 'heading'), metadata.PRIMITIVE)
        self.assertTrue(metadata.classify(Renamed, 'title') is None)
        self.assertEqual(metadata.field_info(Renamed, 'heading').attrname, 'title')

    def test_inherited(self):

        class Fancy(utils.Simple):
            schema = 'simple'
            baz = fields.Related('Author')

        self.assertEqual(metadata.classify(Fancy, 'foo'), metadata.PRIMITIVE)
        self.assertEqual(metadata.classify(Fancy, 'baz'), metadata.MODEL)
        self.assertEqual(set(metadata.ensure_metadata(Fancy)),
                         set(['foo', 'bar', 'baz']))

        # The parent class doesn't learn about the subclass's fields.
        self.assertTrue(metadata.classify(utils.Simple, 'baz') is None)

    def test_overridden(self):

        class Parent(Model):
            thing = fields.Field()

        class Child(Parent):
            schema = 'parent'
            thing = fields.List(fields.Field())

        self.assertEqual(metadata.classify(Parent, 'thing'), metadata.PRIMITIVE)
        self.assertEqual(metadata.classify(Child, 'thing'), metadata.PRIMITIVE_ARRAY)

    def test_bad_schema_name(self):
        self.assertRaises(ConfigurationError, metadata.classify,
                          utils.Bad_Schema_Name, 'foo')
        self.assertRaises(ConfigurationError, metadata.ensure_metadata,
                          utils.Bad_Schema_Name)
        self.assertFalse(utils.Bad_Schema_Name in metadata.metadata_for_classes)

    def test_short_schema_name(self):

        class Ab(Model):
            foo = fields.Field()

        self.assertRaises(ConfigurationError, metadata.classify, Ab, 'foo')

    def test_cached(self):

        class Cached(Model):
            foo = fields.Field()
            bar = fields.Related('Author')

        first = metadata.ensure_metadata(Cached)
        with mock.patch.object(metadata, 'determine_kind') as determine_kind:
            self.assertEqual(metadata.classify(Cached, 'foo'), metadata.PRIMITIVE)
            self.assertEqual(metadata.classify(Cached, 'foo'), metadata.PRIMITIVE)
            self.assertEqual(metadata.classify(Cached, 'bar'), metadata.MODEL)
            self.assertTrue(metadata.ensure_metadata(Cached) is first)
        self.assertFalse(determine_kind.called)

    def test_concurrent_population(self):

        class Raced(Model):
            foo = fields.Field()
            bar = fields.List(fields.Field(type=int))

        barrier = threading.Barrier(8)
        tables = []

        def classify():
            barrier.wait()
            tables.append(metadata.ensure_metadata(Raced))

        threads = [threading.Thread(target=classify) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(len(tables), 8)
        for table in tables:
            self.assertTrue(table is tables[0])
        self.assertEqual(tables[0]['bar'].kind, metadata.PRIMITIVE_ARRAY)


class TestDataObject(unittest.TestCase):

    def test_fields_table(self):
        self.assertEqual(set(utils.Book.fields), set(['title', 'publisher', 'author']))
        self.assertEqual(utils.Book.__name__, 'Book',
            "metaclass magic didn't break our class's name")

    def test_forward_reference(self):
        self.assertTrue(utils.Book.author.cls is utils.Author)

    def test_descriptorwise(self):
        b = utils.Simple()
        self.assertTrue(b.foo is None)
        b.foo = 'hi'
        self.assertEqual(b.foo, 'hi')

        del b.foo
        self.assertTrue(b.foo is None)

    def test_default(self):

        class Defaulted(Model):
            count = fields.Field(type=int, default=7)
            tags  = fields.List(fields.Field(), default=lambda obj: [])

        d = Defaulted()
        self.assertEqual(d.count, 7)
        self.assertEqual(d.tags, [])
        d.tags.append('x')
        self.assertEqual(Defaulted().tags, [])

    def test_equality(self):
        self.assertEqual(utils.Simple(foo='a', bar=1), utils.Simple(foo='a', bar=1))
        self.assertNotEqual(utils.Simple(foo='a', bar=1), utils.Simple(foo='a', bar=2))
        self.assertNotEqual(utils.Simple(foo='a'), utils.Author(name='a'))


if __name__ == '__main__':
    unittest.main()
