"""Tests for reading and writing XLIFF 1.2 documents."""

import tempfile
from pathlib import Path

import pytest
from lxml import etree

from localization_toolkit.core.translation_unit import Location, TranslationUnit
from localization_toolkit.core.xliff import Xliff


DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'

TWO_FILES_SOURCE_ONLY = (
    DECLARATION +
    '<xliff version="1.2">\n'
    '  <file original="foo/bar/asdf.java" source-language="en-US" target-language="de-DE" product-name="androidapp">\n'
    '    <body>\n'
    '      <trans-unit id="1" resname="foobar" restype="string" datatype="plaintext">\n'
    '        <source>Asdf asdf</source>\n'
    '      </trans-unit>\n'
    '    </body>\n'
    '  </file>\n'
    '  <file original="foo/bar/j.java" source-language="en-US" target-language="fr-FR" product-name="webapp">\n'
    '    <body>\n'
    '      <trans-unit id="2" resname="huzzah" restype="string" datatype="plaintext">\n'
    '        <source>baby baby</source>\n'
    '      </trans-unit>\n'
    '    </body>\n'
    '  </file>\n'
    '</xliff>'
)

TWO_UNITS_WITH_CONTEXT = (
    DECLARATION +
    '<xliff version="1.2">\n'
    '  <file original="/a/b/asdf.js" source-language="en-US" target-language="fr-FR" product-name="iosapp">\n'
    '    <body>\n'
    '      <trans-unit id="2333" resname="asdf" restype="string" x-context="asdfasdf">\n'
    '        <source>bababa</source>\n'
    '        <target>ababab</target>\n'
    '        <note annotates="source">this is a comment</note>\n'
    '      </trans-unit>\n'
    '      <trans-unit id="2334" resname="asdf" restype="string" x-context="asdfasdf">\n'
    '        <source>bababa</source>\n'
    '        <target>ababab</target>\n'
    '        <note annotates="source">this is a different comment</note>\n'
    '      </trans-unit>\n'
    '    </body>\n'
    '  </file>\n'
    '</xliff>'
)


def single_unit(source_xml, target_xml='', target_language='fr-FR'):
    """Build a one-unit 1.2 document around the given source/target markup."""
    return (
        DECLARATION +
        '<xliff version="1.2">\n'
        f'  <file original="foo/bar/j.java" source-language="en-US" target-language="{target_language}" product-name="webapp">\n'
        '    <body>\n'
        '      <trans-unit id="2" resname="huzzah" restype="string">\n'
        f'        {source_xml}\n'
        + (f'        {target_xml}\n' if target_xml else '') +
        '      </trans-unit>\n'
        '    </body>\n'
        '  </file>\n'
        '</xliff>'
    )


def make_unit(**kwargs):
    fields = {
        'source': 'Asdf asdf',
        'source_locale': 'en-US',
        'key': 'foobar',
        'file': 'foo/bar/asdf.java',
        'project': 'webapp',
    }
    fields.update(kwargs)
    return TranslationUnit(**fields)


class TestXliffConstruction:
    """Test cases for document construction."""

    def test_default_version(self):
        """Documents should default to version 1.2."""
        assert Xliff().get_version() == 1.2

    def test_version_from_string(self):
        """String versions should be converted to numbers."""
        assert Xliff(version='2.0').get_version() == 2.0
        assert Xliff(version=2).get_version() == 2.0

    def test_invalid_version(self):
        """A non-numeric version should be rejected."""
        with pytest.raises(ValueError):
            Xliff(version='latest')

    def test_empty_document(self):
        """A new document should have no units and no counts."""
        x = Xliff()
        assert x.size() == 0
        assert x.get_translation_units() == []
        assert x.get_lines() == 0
        assert x.get_bytes() == 0


class TestAddTranslationUnits:
    """Test cases for adding, deduplicating and merging units."""

    def test_add_single_unit(self):
        """A single unit should be stored unchanged."""
        x = Xliff()
        tu = make_unit(target='foobarfoo', target_locale='de-DE')
        x.add_translation_unit(tu)
        assert x.size() == 1
        assert x.get_translation_units()[0] == tu

    def test_add_same_unit_twice(self):
        """Adding the same unit twice should not create a duplicate."""
        x = Xliff()
        tu = make_unit(target='foobarfoo', target_locale='de-DE')
        x.add_translation_unit(tu)
        x.add_translation_unit(tu)
        assert x.size() == 1

    def test_same_identity_is_merged(self):
        """A unit with the same identity should update the stored unit."""
        x = Xliff()
        x.add_translation_unit(make_unit(target='foobarfoo', target_locale='de-DE', comment='first'))
        x.add_translation_unit(make_unit(target='neu', target_locale='de-DE'))

        units = x.get_translation_units()
        assert len(units) == 1
        assert units[0].target == 'neu'
        assert units[0].comment == 'first'

    def test_allow_dups_keeps_both(self):
        """With allow_dups the second unit should be appended."""
        x = Xliff(allow_dups=True)
        x.add_translation_unit(make_unit(target='a', target_locale='de-DE'))
        x.add_translation_unit(make_unit(target='b', target_locale='de-DE'))
        assert x.size() == 2

    def test_source_only_unit_upgraded(self):
        """A translated unit should replace the source-only unit of the same string."""
        x = Xliff()
        x.add_translation_unit(make_unit(comment='translator note'))
        x.add_translation_unit(make_unit(target='Asdf', target_locale='de-DE'))

        units = x.get_translation_units()
        assert len(units) == 1
        assert units[0].target == 'Asdf'
        assert units[0].target_locale == 'de-DE'
        assert units[0].comment == 'translator note'

    def test_different_keys_kept_apart(self):
        """Units with different keys should both be stored in order."""
        x = Xliff()
        x.add_translation_units([
            make_unit(),
            make_unit(key='huzzah', source='baby baby', file='foo/bar/j.java'),
        ])
        assert [tu.key for tu in x.get_translation_units()] == ['foobar', 'huzzah']

    def test_joined_key_collisions_kept_apart(self):
        """Fields that only collide once joined with '_' should not be merged."""
        x = Xliff()
        x.add_translation_unit(make_unit(key='a_b', file='c'))
        x.add_translation_unit(make_unit(key='a', file='b_c'))
        assert x.size() == 2

    def test_different_target_locales_allowed(self):
        """Version 1.2 documents should accept several target locales."""
        x = Xliff()
        x.add_translation_unit(make_unit(target='a', target_locale='de-DE'))
        x.add_translation_unit(make_unit(target='b', target_locale='fr-FR'))
        assert x.size() == 2

    def test_clear(self):
        """clear should remove all units."""
        x = Xliff()
        x.add_translation_unit(make_unit())
        x.clear()
        assert x.size() == 0
        x.add_translation_unit(make_unit())
        assert x.size() == 1


class TestSerialize:
    """Test cases for 1.2 serialization."""

    def test_serialize_source_and_target(self):
        """Units should be written with state, note and datatype."""
        x = Xliff()
        x.add_translation_unit(make_unit(
            target='bam bam',
            target_locale='de-DE',
            res_type='string',
            state='new',
            comment='This is a comment',
            datatype='java',
        ))

        expected = (
            DECLARATION +
            '<xliff version="1.2">\n'
            '  <file original="foo/bar/asdf.java" source-language="en-US" target-language="de-DE" product-name="webapp">\n'
            '    <body>\n'
            '      <trans-unit id="1" resname="foobar" restype="string" datatype="java">\n'
            '        <source>Asdf asdf</source>\n'
            '        <target state="new">bam bam</target>\n'
            '        <note>This is a comment</note>\n'
            '      </trans-unit>\n'
            '    </body>\n'
            '  </file>\n'
            '</xliff>'
        )
        assert x.serialize() == expected

    def test_serialize_source_only(self):
        """A unit without target should be written without target-language."""
        x = Xliff()
        x.add_translation_unit(make_unit(datatype='plaintext'))

        expected = (
            DECLARATION +
            '<xliff version="1.2">\n'
            '  <file original="foo/bar/asdf.java" source-language="en-US" product-name="webapp">\n'
            '    <body>\n'
            '      <trans-unit id="1" resname="foobar" restype="string" datatype="plaintext">\n'
            '        <source>Asdf asdf</source>\n'
            '      </trans-unit>\n'
            '    </body>\n'
            '  </file>\n'
            '</xliff>'
        )
        assert x.serialize() == expected

    def test_serialize_comments_in_two_files(self):
        """Each file should get its own element and notes should be escaped."""
        x = Xliff()
        x.add_translation_unit(make_unit(
            target='foobarfoo', target_locale='de-DE', comment="foobar is where it's at!",
        ))
        x.add_translation_unit(make_unit(
            source='baby baby', target='bebe bebe', target_locale='fr-FR', key='huzzah',
            file='foo/bar/j.java', comment='come & enjoy it with us',
        ))

        expected = (
            DECLARATION +
            '<xliff version="1.2">\n'
            '  <file original="foo/bar/asdf.java" source-language="en-US" target-language="de-DE" product-name="webapp">\n'
            '    <body>\n'
            '      <trans-unit id="1" resname="foobar" restype="string">\n'
            '        <source>Asdf asdf</source>\n'
            '        <target>foobarfoo</target>\n'
            "        <note>foobar is where it's at!</note>\n"
            '      </trans-unit>\n'
            '    </body>\n'
            '  </file>\n'
            '  <file original="foo/bar/j.java" source-language="en-US" target-language="fr-FR" product-name="webapp">\n'
            '    <body>\n'
            '      <trans-unit id="2" resname="huzzah" restype="string">\n'
            '        <source>baby baby</source>\n'
            '        <target>bebe bebe</target>\n'
            '        <note>come &amp; enjoy it with us</note>\n'
            '      </trans-unit>\n'
            '    </body>\n'
            '  </file>\n'
            '</xliff>'
        )
        assert x.serialize() == expected

    def test_serialize_extended_attributes(self):
        """Extended fields should be written as x- attributes."""
        x = Xliff()
        x.add_translation_unit(make_unit(target='foobarfoo', target_locale='de-DE', extended={'foo': 'bar'}))

        assert '<trans-unit id="1" resname="foobar" restype="string" x-foo="bar">' in x.serialize()

    def test_serialize_header(self):
        """Tool information should be written in a header element."""
        x = Xliff(
            tool_id='loctool',
            tool_name='Localization Tool',
            tool_version='1.2.34',
            tool_company='My Company, Inc.',
            copyright='Copyright 2016, My Company, Inc. All rights reserved.',
            path='a/b/c.xliff',
        )
        x.add_translation_unit(make_unit(target='baby baby', target_locale='nl-NL', datatype='plaintext'))

        expected = (
            DECLARATION +
            '<xliff version="1.2">\n'
            '  <file original="foo/bar/asdf.java" source-language="en-US" target-language="nl-NL" product-name="webapp">\n'
            '    <header>\n'
            '      <tool tool-id="loctool" tool-name="Localization Tool" tool-version="1.2.34" '
            'tool-company="My Company, Inc." copyright="Copyright 2016, My Company, Inc. All rights reserved."/>\n'
            '    </header>\n'
            '    <body>\n'
            '      <trans-unit id="1" resname="foobar" restype="string" datatype="plaintext">\n'
            '        <source>Asdf asdf</source>\n'
            '        <target>baby baby</target>\n'
            '      </trans-unit>\n'
            '    </body>\n'
            '  </file>\n'
            '</xliff>'
        )
        assert x.serialize() == expected

    def test_serialize_escaping(self):
        """Text and attributes should be escaped, already-escaped text double escaped."""
        x = Xliff()
        x.add_translation_units([
            make_unit(
                source='Asdf <b>asdf</b>', target="Asdf 'quotes'", target_locale='de-DE',
                key='foobar "asdf"', project='androidapp', datatype='plaintext',
            ),
            make_unit(
                source='baby &lt;b&gt;baby&lt;/b&gt;', target='baby #(test)', target_locale='de-DE',
                key='huzzah &quot;asdf&quot; #(test)', file='foo/bar/j.java', datatype='plaintext',
            ),
        ])

        actual = x.serialize()
        assert '<trans-unit id="1" resname="foobar &quot;asdf&quot;" restype="string" datatype="plaintext">' in actual
        assert '<source>Asdf &lt;b&gt;asdf&lt;/b&gt;</source>' in actual
        assert "<target>Asdf 'quotes'</target>" in actual
        assert 'resname="huzzah &amp;quot;asdf&amp;quot; #(test)"' in actual
        assert '<source>baby &amp;lt;b&amp;gt;baby&amp;lt;/b&amp;gt;</source>' in actual

    def test_serialize_files_sorted(self):
        """File elements should be ordered by their file key, not insertion order."""
        x = Xliff()
        x.add_translation_unit(make_unit(
            source='bababa', target='ababab', target_locale='fr-FR', key='asdf',
            file='/a/b/asdf.js', project='iosapp', id=2333, context='asdfasdf', comment='this is a comment',
        ))
        x.add_translation_unit(make_unit(
            source='a', target='b', target_locale='de-DE', key='foobar',
            file='/a/b/asdf.js', project='iosapp', id=2334, context='asdfasdf', comment='this is a comment',
        ))

        expected = (
            DECLARATION +
            '<xliff version="1.2">\n'
            '  <file original="/a/b/asdf.js" source-language="en-US" target-language="de-DE" product-name="iosapp">\n'
            '    <body>\n'
            '      <trans-unit id="2334" resname="foobar" restype="string" x-context="asdfasdf">\n'
            '        <source>a</source>\n'
            '        <target>b</target>\n'
            '        <note>this is a comment</note>\n'
            '      </trans-unit>\n'
            '    </body>\n'
            '  </file>\n'
            '  <file original="/a/b/asdf.js" source-language="en-US" target-language="fr-FR" product-name="iosapp">\n'
            '    <body>\n'
            '      <trans-unit id="2333" resname="asdf" restype="string" x-context="asdfasdf">\n'
            '        <source>bababa</source>\n'
            '        <target>ababab</target>\n'
            '        <note>this is a comment</note>\n'
            '      </trans-unit>\n'
            '    </body>\n'
            '  </file>\n'
            '</xliff>'
        )
        assert x.serialize() == expected

    def test_serialize_files_sorted_by_joined_key(self):
        """A locale that extends another should sort the way the joined key string does."""
        x = Xliff()
        x.add_translation_units([
            make_unit(target='a', target_locale='fr', file='f.js', project='p'),
            make_unit(target='b', target_locale='fr-CA', file='f.js', project='p'),
        ])
        actual = x.serialize()
        assert actual.index('target-language="fr-CA"') < actual.index('target-language="fr"')

    def test_generated_ids_skip_later_explicit_ids(self):
        """A generated id should never reuse an explicit id further down the list."""
        x = Xliff()
        x.add_translation_units([
            make_unit(key='a'),
            make_unit(key='b', id='1'),
        ])
        ids = [element.get('id') for element in etree.fromstring(x.serialize().encode('utf-8')).iter('trans-unit')]
        assert ids == ['2', '1']

    def test_serialize_translate_false(self):
        """translate=False should be written, translate=True omitted."""
        x = Xliff()
        x.add_translation_unit(make_unit(target='bam bam', target_locale='de-DE', datatype='java', translate=False))
        assert 'datatype="java" translate="false">' in x.serialize()

        x = Xliff()
        x.add_translation_unit(make_unit(target='bam bam', target_locale='de-DE', datatype='java', translate=True))
        assert 'translate=' not in x.serialize()

    def test_serialize_plurals_and_arrays(self):
        """Plural categories and array indexes should go into extype."""
        x = Xliff()
        x.add_translation_units([
            make_unit(source='one file', key='files', res_type='plural', quantity='one'),
            make_unit(source='{n} files', key='files', res_type='plural', quantity='other'),
            make_unit(source='Monday', key='days', res_type='array', ordinal=0),
        ])

        actual = x.serialize()
        assert '<trans-unit id="1" resname="files" restype="plural" extype="one">' in actual
        assert '<trans-unit id="2" resname="files" restype="plural" extype="other">' in actual
        assert '<trans-unit id="3" resname="days" restype="array" extype="0">' in actual

    def test_explicit_ids_advance_counter(self):
        """Generated ids should continue after an explicit numeric id."""
        x = Xliff()
        x.add_translation_units([
            make_unit(key='a', id=5),
            make_unit(key='b'),
        ])
        actual = x.serialize()
        assert '<trans-unit id="5" resname="a"' in actual
        assert '<trans-unit id="6" resname="b"' in actual

    def test_serialize_untranslated_only(self):
        """untranslated=True should only write units without a target."""
        x = Xliff()
        x.add_translation_units([
            make_unit(key='done', target='fertig', target_locale='de-DE'),
            make_unit(key='todo', source='To do', target_locale='de-DE'),
        ])
        actual = x.serialize(untranslated=True)
        assert 'resname="todo"' in actual
        assert 'resname="done"' not in actual

    def test_serialize_empty_document(self):
        """An empty document should serialize to a self-closing root."""
        assert Xliff().serialize() == DECLARATION + '<xliff version="1.2"/>'

    def test_serialize_round_trip(self):
        """Serialized text should deserialize to equivalent units."""
        x = Xliff()
        x.add_translation_unit(make_unit(
            source='Asdf <b>asdf</b>', target='Asdf & co', target_locale='de-DE',
            key='foobar "asdf"', comment='note', state='translated',
        ))

        y = Xliff()
        tu = y.deserialize(x.serialize())[0]
        assert tu.source == 'Asdf <b>asdf</b>'
        assert tu.target == 'Asdf & co'
        assert tu.key == 'foobar "asdf"'
        assert tu.comment == 'note'
        assert tu.state == 'translated'


class TestDeserialize:
    """Test cases for 1.2 deserialization."""

    def test_deserialize_source_only(self):
        """Units should carry file-level attributes and their location."""
        x = Xliff()
        units = x.deserialize(TWO_FILES_SOURCE_ONLY)

        assert len(units) == 2
        first, second = units

        assert first.source == 'Asdf asdf'
        assert first.source_locale == 'en-US'
        assert first.target is None
        assert first.target_locale == 'de-DE'
        assert first.key == 'foobar'
        assert first.file == 'foo/bar/asdf.java'
        assert first.project == 'androidapp'
        assert first.res_type == 'string'
        assert first.datatype == 'plaintext'
        assert first.id == '1'
        assert first.location == Location(line=4, char=7)

        assert second.key == 'huzzah'
        assert second.target_locale == 'fr-FR'
        assert second.project == 'webapp'
        assert second.id == '2'
        assert second.location == Location(line=11, char=7)

    def test_deserialize_source_and_target(self):
        """Targets should be read and shift later locations."""
        x = Xliff()
        units = x.deserialize(
            DECLARATION +
            '<xliff version="1.2">\n'
            '  <file original="foo/bar/asdf.java" source-language="en-US" target-language="de-DE" product-name="androidapp">\n'
            '    <body>\n'
            '      <trans-unit id="1" resname="foobar" restype="string">\n'
            '        <source>Asdf asdf</source>\n'
            '        <target>foobarfoo</target>\n'
            '      </trans-unit>\n'
            '    </body>\n'
            '  </file>\n'
            '  <file original="foo/bar/j.java" source-language="en-US" target-language="fr-FR" product-name="webapp">\n'
            '    <body>\n'
            '      <trans-unit id="2" resname="huzzah" restype="string">\n'
            '        <source>baby baby</source>\n'
            '        <target>bebe bebe</target>\n'
            '      </trans-unit>\n'
            '    </body>\n'
            '  </file>\n'
            '</xliff>'
        )

        assert units[0].target == 'foobarfoo'
        assert units[0].translate is None
        assert units[0].location == Location(4, 7)
        assert units[1].target == 'bebe bebe'
        assert units[1].target_locale == 'fr-FR'
        assert units[1].location == Location(12, 7)

    def test_deserialize_resfile(self):
        """The resfile argument should be stored on every unit."""
        units = Xliff().deserialize(TWO_FILES_SOURCE_ONLY, resfile='foo/bar/x.xliff')
        assert all(tu.resfile == 'foo/bar/x.xliff' for tu in units)

    def test_deserialize_location_ignores_commented_tags(self):
        """Tag-like text inside a comment should not shift unit locations."""
        x = Xliff()
        x.deserialize(
            DECLARATION +
            '<xliff version="1.2">\n'
            '  <file original="foo/bar/j.java" source-language="en-US" target-language="fr-FR" product-name="webapp">\n'
            '    <body>\n'
            '      <!-- <trans-unit id="0"> was removed -->\n'
            '      <trans-unit id="1" resname="a" restype="string">\n'
            '        <source>Hello</source>\n'
            '      </trans-unit>\n'
            '    </body>\n'
            '  </file>\n'
            '</xliff>'
        )
        units = x.get_translation_units()
        assert len(units) == 1
        assert units[0].location == Location(5, 7)

    def test_deserialize_extended_and_context(self):
        """x- attributes should be collected and x-context read as context."""
        units = Xliff(allow_dups=True).deserialize(TWO_UNITS_WITH_CONTEXT)
        assert units[0].context == 'asdfasdf'
        assert units[0].comment == 'this is a comment'
        assert units[0].extended == {'context': 'asdfasdf'}

    def test_deserialize_without_extended(self):
        """Units without x- attributes should have no extended mapping."""
        units = Xliff().deserialize(TWO_FILES_SOURCE_ONLY)
        assert units[0].extended is None

    def test_deserialize_keeps_duplicates(self):
        """Units parsed from a file should all be kept, duplicates included."""
        units = Xliff().deserialize(TWO_UNITS_WITH_CONTEXT)
        assert len(units) == 2
        assert units[1].comment == 'this is a different comment'

    def test_deserialize_unescaping(self):
        """Entities should be decoded once, double escaping kept once."""
        units = Xliff().deserialize(single_unit(
            '<source>baby &amp;lt;b&amp;gt;baby&amp;lt;/b&amp;gt;</source>'
        ))
        assert units[0].source == 'baby &lt;b&gt;baby&lt;/b&gt;'

    def test_deserialize_unescaping_in_resname(self):
        """Escaped markup in resname should be decoded."""
        text = single_unit('<source>Asdf</source>').replace(
            'resname="huzzah"', 'resname="foobar &lt;a>link&lt;/a>"'
        )
        assert Xliff().deserialize(text)[0].key == 'foobar <a>link</a>'

    def test_deserialize_empty_source_skipped(self):
        """Units with an empty source should be skipped."""
        x = Xliff()
        units = x.deserialize(
            DECLARATION +
            '<xliff version="1.2">\n'
            '  <file original="foo/bar/asdf.java" source-language="en-US" target-language="de-DE" product-name="androidapp">\n'
            '    <body>\n'
            '      <trans-unit id="1" resname="foobar" restype="string" x-context="na na na">\n'
            '        <source></source>\n'
            '        <target>Baby Baby</target>\n'
            '      </trans-unit>\n'
            '      <trans-unit id="2" resname="huzzah" restype="string">\n'
            '        <source>baby baby</source>\n'
            '        <target>bebe bebe</target>\n'
            '      </trans-unit>\n'
            '    </body>\n'
            '  </file>\n'
            '</xliff>'
        )
        assert len(units) == 1
        assert units[0].key == 'huzzah'

    def test_deserialize_empty_target(self):
        """An empty target element should leave the target unset."""
        units = Xliff().deserialize(single_unit('<source>baby baby</source>', '<target></target>'))
        assert units[0].target is None

    def test_deserialize_missing_resname_uses_source(self):
        """Without resname the source text should be the key."""
        text = single_unit('<source>baby baby</source>').replace(' resname="huzzah"', '')
        assert Xliff().deserialize(text)[0].key == 'baby baby'

    def test_deserialize_mrk_in_target(self):
        """Segment markers in a target should be reduced to their text."""
        units = Xliff().deserialize(single_unit(
            '<source>baby baby</source>',
            '<target><mrk mtype="seg" mid="4">This is segment 1.</mrk>\n'
            '<mrk mtype="seg" mid="5">This is segment 2.</mrk> <mrk mtype="seg" mid="6">This is segment 3.</mrk></target>',
        ))
        assert units[0].target == 'This is segment 1.\nThis is segment 2. This is segment 3.'

    def test_deserialize_mrk_in_target_asian(self):
        """Version 1.2 keeps whitespace between markers for Asian locales too."""
        units = Xliff().deserialize(single_unit(
            '<source>baby baby</source>',
            '<target><mrk mtype="seg" mid="4">This is segment 1.</mrk> <mrk mtype="seg" mid="5">This is segment 2.</mrk></target>',
            target_language='zh-Hans-CN',
        ))
        assert units[0].target == 'This is segment 1. This is segment 2.'

    def test_deserialize_group_whitespace(self):
        """Whitespace between inline elements in the source should be kept."""
        units = Xliff().deserialize(single_unit(
            '<source><g id="1">This is group 1.</g>\n<g id="2">This is group 2.</g> <g id="3">This is group 3.</g></source>',
            target_language='',
        ))
        assert units[0].source == 'This is group 1.\nThis is group 2. This is group 3.'
        assert units[0].target_locale == ''

    def test_deserialize_x_tag_equiv_text(self):
        """Empty inline elements should contribute their equiv-text."""
        units = Xliff().deserialize(single_unit(
            '<source>Less-than sign (<x id="1" equiv-text="&lt;"/>) is not allowed in XLIFF.</source>',
            '<target>Le signe inférieur (<x id="1" equiv-text="&lt;"/>) n\'est pas autorisé dans XLIFF.</target>',
        ))
        assert units[0].source == 'Less-than sign (<) is not allowed in XLIFF.'
        assert units[0].target == "Le signe inférieur (<) n'est pas autorisé dans XLIFF."

    def test_deserialize_inline_content(self):
        """Inline elements with content should contribute the content."""
        units = Xliff().deserialize(single_unit(
            '<source><bpt id="1">&lt;B></bpt>Bold <bpt id="2">&lt;I></bpt>Bold and Italic'
            '<ept id="1">&lt;/B></ept> Italics<ept id="2">&lt;/I></ept></source>'
        ))
        assert units[0].source == '<B>Bold <I>Bold and Italic</B> Italics</I>'

    def test_deserialize_content_over_equiv_text(self):
        """Content should win over an empty equiv-text attribute."""
        units = Xliff().deserialize(single_unit(
            '<source>The icon <ph x="1" equiv-text="">&lt;img src="testNode.gif"/></ph> represents a conditional node.</source>'
        ))
        assert units[0].source == 'The icon <img src="testNode.gif"/> represents a conditional node.'

    def test_deserialize_cdata(self):
        """CDATA sections should be read as text."""
        units = Xliff().deserialize(single_unit(
            '<source><![CDATA[In CDATA sections, even the less-than sign < is allowed.]]></source>'
        ))
        assert units[0].source == 'In CDATA sections, even the less-than sign < is allowed.'

    def test_deserialize_whitespace_preserved(self):
        """Leading and trailing whitespace in source and target should be kept."""
        units = Xliff().deserialize(single_unit(
            '<source>      baby baby\n\t\t</source>', '<target>\n\t\t bebe bebe    </target>'
        ))
        assert units[0].source == '      baby baby\n\t\t'
        assert units[0].target == '\n\t\t bebe bebe    '

    @pytest.mark.parametrize('value, expected', [
        ('false', False),
        ('no', False),
        ('NO', False),
        ('true', None),
        ('yes', None),
    ])
    def test_deserialize_translate_flag(self, value, expected):
        """Only no/false should mark a unit as not translatable."""
        text = single_unit('<source>baby baby</source>').replace(
            'restype="string"', f'restype="string" translate="{value}"'
        )
        assert Xliff().deserialize(text)[0].translate is expected

    def test_deserialize_plural_and_array(self):
        """extype should be read as quantity for plurals and ordinal for arrays."""
        text = (
            DECLARATION +
            '<xliff version="1.2">\n'
            '  <file original="a.java" source-language="en-US" product-name="webapp">\n'
            '    <body>\n'
            '      <trans-unit id="1" resname="files" restype="plural" extype="one">\n'
            '        <source>one file</source>\n'
            '      </trans-unit>\n'
            '      <trans-unit id="2" resname="days" restype="array" extype="3">\n'
            '        <source>Thursday</source>\n'
            '      </trans-unit>\n'
            '    </body>\n'
            '  </file>\n'
            '</xliff>'
        )
        plural, array = Xliff().deserialize(text)
        assert plural.quantity == 'one'
        assert plural.ordinal is None
        assert array.ordinal == 3
        assert array.quantity is None

    def test_deserialize_unknown_version(self):
        """Documents with an unknown version should yield no units."""
        text = TWO_FILES_SOURCE_ONLY.replace('version="1.2"', 'version="3.0"')
        assert Xliff().deserialize(text) == []

    def test_deserialize_not_xliff(self):
        """A document with another root element should yield no units."""
        assert Xliff().deserialize('<resources><string name="a">b</string></resources>') == []

    def test_deserialize_malformed(self):
        """Malformed XML should raise XMLSyntaxError."""
        with pytest.raises(etree.XMLSyntaxError):
            Xliff().deserialize('<xliff version="1.2"><file>')

    def test_deserialize_appends(self):
        """Deserializing twice should accumulate units."""
        x = Xliff()
        x.deserialize(TWO_FILES_SOURCE_ONLY)
        x.deserialize(TWO_FILES_SOURCE_ONLY)
        assert x.size() == 4


class TestPositions:
    """Test cases for line, byte and position indexing."""

    def test_lines_after_deserialize(self):
        """Line count should be taken from the parsed text."""
        x = Xliff(allow_dups=True)
        x.deserialize(TWO_UNITS_WITH_CONTEXT)
        assert x.get_lines() == 17

    def test_bytes_after_deserialize(self):
        """Byte count should be the length of the parsed text."""
        x = Xliff(allow_dups=True)
        x.deserialize(TWO_UNITS_WITH_CONTEXT)
        assert x.get_bytes() == 663

    def test_counts_after_serialize(self):
        """Line and byte counts should be updated by serialize."""
        x = Xliff()
        x.add_translation_units([
            TranslationUnit(
                source='Asdf asdf', source_locale='en-US', target='Asdf', target_locale='de-DE',
                key='foobar asdf', file='foo/bar/asdf.java', project='androidapp',
                origin='target', datatype='plaintext',
            ),
            TranslationUnit(
                source='baby baby', source_locale='en-US', target='baby', target_locale='de-DE',
                key='huzzah asdf test', file='foo/bar/j.java', project='webapp',
                origin='target', datatype='plaintext',
            ),
        ])
        x.serialize()
        assert x.get_lines() == 19
        assert x.get_bytes() == 699

    def test_char_position_before_parse(self):
        """Before any text is indexed the position should map to line 0."""
        assert Xliff().char_position_to_location(12) == Location(0, 12)

    def test_char_position_to_location(self):
        """Offsets should map to zero-based line and column."""
        x = Xliff()
        x.deserialize(TWO_FILES_SOURCE_ONLY)
        assert x.char_position_to_location(0) == Location(0, 0)
        assert x.char_position_to_location(len(DECLARATION)) == Location(1, 0)
        assert x.char_position_to_location(len(DECLARATION) + 3) == Location(1, 3)

    def test_char_position_on_last_line(self):
        """Offsets on the last line should resolve to that line."""
        x = Xliff()
        x.deserialize(TWO_FILES_SOURCE_ONLY)
        last_line_start = TWO_FILES_SOURCE_ONLY.rindex('\n') + 1
        assert x.char_position_to_location(last_line_start + 2) == Location(16, 2)


class TestFiles:
    """Test cases for load and save."""

    def test_save_and_load(self):
        """A saved document should load back with the same units."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / 'out' / 'de-DE.xliff'

            x = Xliff(path=str(path))
            x.add_translation_unit(make_unit(target='Hallo', target_locale='de-DE'))
            written = x.save()

            assert written == path
            assert path.read_text(encoding='utf-8') == x.serialize()

            units = Xliff().load(path)
            assert len(units) == 1
            assert units[0].target == 'Hallo'
            assert units[0].resfile == str(path)

    def test_save_without_path(self):
        """Saving without any path should raise ValueError."""
        with pytest.raises(ValueError):
            Xliff().save()

    def test_load_missing_file(self):
        """Loading a missing file should raise OSError."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(OSError):
                Xliff().load(Path(tmpdir) / 'missing.xliff')
