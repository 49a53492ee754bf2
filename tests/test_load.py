import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import re

import pytest

from xliff2_codec import (
    Message,
    Placeholder,
    TagPlaceholder,
    Text,
    Xliff2,
    Xliff2LoadError,
    serialize_nodes,
)

LOAD_XLIFF = """<?xml version="1.0" encoding="UTF-8" ?>
<xliff version="2.0" xmlns="urn:oasis:names:tc:xliff:document:2.0" srcLang="en" trgLang="fr">
  <file original="ng.template" id="ngi18n">
    <unit id="983775b9a51ce14b036be72d4cfd65d68d64e231">
      <segment>
        <source>translatable attribute</source>
        <target>etubirtta elbatalsnart</target>
      </segment>
    </unit>
    <unit id="ec1d033f2436133c14ab038286c4f5df4697484a">
      <segment>
        <source>translatable element <pc id="0" equivStart="START_BOLD_TEXT" equivEnd="CLOSE_BOLD_TEXT" type="fmt" dispStart="&lt;b&gt;" dispEnd="&lt;/b&gt;">with placeholders</pc> <ph id="1" equiv="INTERPOLATION" disp="{{ interpolation}}"/></source>
        <target><ph id="1" equiv="INTERPOLATION" disp="{{ interpolation}}"/> <pc id="0" equivStart="START_BOLD_TEXT" equivEnd="CLOSE_BOLD_TEXT" type="fmt" dispStart="&lt;b&gt;" dispEnd="&lt;/b&gt;">sredlohecalp htiw</pc> tnemele elbatalsnart</target>
      </segment>
    </unit>
    <unit id="db3e0a6a5a96481f60aec61d98c3eecddef5ac23">
      <notes>
        <note category="description">d</note>
        <note category="meaning">m</note>
      </notes>
      <segment>
        <source>foo</source>
        <target>oof</target>
      </segment>
    </unit>
    <unit id="6766186b23e26e46114f5b05a263c1aa2aae08bc">
      <notes>
        <note category="description">nested</note>
      </notes>
      <segment>
        <source><pc id="0" equivStart="START_BOLD_TEXT" equivEnd="CLOSE_BOLD_TEXT" type="fmt" dispStart="&lt;b&gt;" dispEnd="&lt;/b&gt;"><pc id="1" equivStart="START_UNDERLINED_TEXT" equivEnd="CLOSE_UNDERLINED_TEXT" type="fmt" dispStart="&lt;u&gt;" dispEnd="&lt;/u&gt;"><ph id="2" equiv="INTERPOLATION" disp="{{interpolation}}"/> Text</pc></pc></source>
        <target><pc id="0" equivStart="START_BOLD_TEXT" equivEnd="CLOSE_BOLD_TEXT" type="fmt" dispStart="&lt;b&gt;" dispEnd="&lt;/b&gt;"><pc id="1" equivStart="START_UNDERLINED_TEXT" equivEnd="CLOSE_UNDERLINED_TEXT" type="fmt" dispStart="&lt;u&gt;" dispEnd="&lt;/u&gt;">txeT <ph id="2" equiv="INTERPOLATION" disp="{{interpolation}}"/></pc></pc></target>
      </segment>
    </unit>
    <unit id="5111eec79a97de6b483081a9a4258fa50e252b02">
      <notes>
        <note category="description">ph names</note>
      </notes>
      <segment>
        <source><ph id="0" equiv="LINE_BREAK" type="fmt" disp="&lt;br/&gt;"/><ph id="1" equiv="TAG_IMG" type="image" disp="&lt;img/&gt;"/><ph id="2" equiv="TAG_IMG_1" type="image" disp="&lt;img/&gt;"/></source>
        <target><ph id="2" equiv="TAG_IMG_1" type="image" disp="&lt;img/&gt;"/><ph id="1" equiv="TAG_IMG" type="image" disp="&lt;img/&gt;"/><ph id="0" equiv="LINE_BREAK" type="fmt" disp="&lt;br/&gt;"/></target>
      </segment>
    </unit>
    <unit id="52e40be15fbdc88ac4ce36b63899b88d779022ba">
      <notes>
        <note category="description">empty element</note>
      </notes>
      <segment>
        <source>hello <pc id="0" equivStart="START_TAG_SPAN" equivEnd="CLOSE_TAG_SPAN" type="other" dispStart="&lt;span&gt;" dispEnd="&lt;/span&gt;"></pc></source>
        <target><pc id="0" equivStart="START_TAG_SPAN" equivEnd="CLOSE_TAG_SPAN" type="other" dispStart="&lt;span&gt;" dispEnd="&lt;/span&gt;"></pc> olleh</target>
      </segment>
    </unit>
  </file>
</xliff>
"""


def load_as_map(xliff):
    nodes_by_msg_id = Xliff2().load(xliff, 'url')
    return {msg_id: ''.join(serialize_nodes(nodes)) for msg_id, nodes in nodes_by_msg_id.items()}


def unit_doc(body, version='2.0'):
    return f"""<?xml version="1.0" encoding="UTF-8" ?>
<xliff version="{version}" xmlns="urn:oasis:names:tc:xliff:document:2.0" srcLang="en">
  <file original="ng.template" id="ngi18n">
{body}
  </file>
</xliff>"""


def test_load_xliff_file():
    assert load_as_map(LOAD_XLIFF) == {
        '983775b9a51ce14b036be72d4cfd65d68d64e231': 'etubirtta elbatalsnart',
        'ec1d033f2436133c14ab038286c4f5df4697484a':
            '<ph name="INTERPOLATION"/> <ph name="START_BOLD_TEXT"/>sredlohecalp htiw'
            '<ph name="CLOSE_BOLD_TEXT"/> tnemele elbatalsnart',
        'db3e0a6a5a96481f60aec61d98c3eecddef5ac23': 'oof',
        '6766186b23e26e46114f5b05a263c1aa2aae08bc':
            '<ph name="START_BOLD_TEXT"/><ph name="START_UNDERLINED_TEXT"/>txeT '
            '<ph name="INTERPOLATION"/><ph name="CLOSE_UNDERLINED_TEXT"/><ph name="CLOSE_BOLD_TEXT"/>',
        '5111eec79a97de6b483081a9a4258fa50e252b02':
            '<ph name="TAG_IMG_1"/><ph name="TAG_IMG"/><ph name="LINE_BREAK"/>',
        '52e40be15fbdc88ac4ce36b63899b88d779022ba':
            '<ph name="START_TAG_SPAN"/><ph name="CLOSE_TAG_SPAN"/> olleh',
    }


def test_loaded_nodes_are_text_and_placeholders():
    nodes = Xliff2().load(LOAD_XLIFF, 'url')['ec1d033f2436133c14ab038286c4f5df4697484a']
    assert [type(n) for n in nodes] == [Placeholder, Text, Placeholder, Text, Placeholder, Text]
    assert all(n.value == '' for n in nodes if isinstance(n, Placeholder))
    assert nodes[0].location.url == 'url'
    assert nodes[0].location.line == 13


def test_write_then_load_reordered_translation():
    message = Message([
        Text('Hi'),
        TagPlaceholder('br', {}, 'LINE_BREAK', '', [], is_void=True),
        TagPlaceholder('b', {}, 'START_BOLD_TEXT', 'CLOSE_BOLD_TEXT',
                       [Placeholder('name', 'INTERPOLATION')]),
    ], id='greeting')
    written = Xliff2().write([message])
    target = (
        '<target><pc id="1" equivStart="START_BOLD_TEXT" equivEnd="CLOSE_BOLD_TEXT">'
        '<ph id="2" equiv="INTERPOLATION"/></pc><ph id="0" equiv="LINE_BREAK"/>Salut</target>'
    )
    translated = written.replace('</source>', '</source>\n        ' + target, 1)
    assert load_as_map(translated) == {
        'greeting': '<ph name="START_BOLD_TEXT"/><ph name="INTERPOLATION"/>'
                    '<ph name="CLOSE_BOLD_TEXT"/><ph name="LINE_BREAK"/>Salut',
    }


def test_wrong_version():
    xliff = """<?xml version="1.0" encoding="UTF-8" ?>
<xliff version="1.2" xmlns="urn:oasis:names:tc:xliff:document:1.2">
  <file source-language="en" datatype="plaintext" original="ng2.template">
    <body>
      <trans-unit id="deadbeef">
        <source/>
        <target/>
      </trans-unit>
    </body>
  </file>
</xliff>"""
    with pytest.raises(Xliff2LoadError, match='The XLIFF file version 1.2 is not compatible with XLIFF 2.0 serializer') as exc:
        load_as_map(xliff)
    assert len(exc.value.errors) == 1


def test_unit_without_translation():
    xliff = unit_doc("""    <unit id="missingtarget">
      <segment>
        <source/>
      </segment>
    </unit>""")
    with pytest.raises(Xliff2LoadError, match='Message missingtarget misses a translation'):
        load_as_map(xliff)


def test_unit_without_id():
    xliff = unit_doc("""    <unit>
      <segment>
        <source/>
        <target/>
      </segment>
    </unit>""")
    with pytest.raises(Xliff2LoadError, match='<unit> misses the "id" attribute'):
        load_as_map(xliff)


def test_duplicate_unit_id():
    unit = """    <unit id="deadbeef">
      <segment>
        <source/>
        <target/>
      </segment>
    </unit>
"""
    with pytest.raises(Xliff2LoadError, match='Duplicated translations for msg deadbeef'):
        load_as_map(unit_doc(unit + unit))


def test_unknown_message_tag():
    xliff = unit_doc("""    <unit id="deadbeef">
      <segment>
        <source/>
        <target><b>msg should contain only ph and pc tags</b></target>
      </segment>
    </unit>""")
    with pytest.raises(Xliff2LoadError, match=re.escape('[ERROR ->]<b>msg should contain only ph and pc tags</b>')):
        load_as_map(xliff)


def test_placeholder_without_equiv():
    xliff = unit_doc("""    <unit id="deadbeef">
      <segment>
        <source/>
        <target><ph/></target>
      </segment>
    </unit>""")
    with pytest.raises(Xliff2LoadError, match=re.escape('<ph> misses the "equiv" attribute')):
        load_as_map(xliff)


def test_errors_are_aggregated():
    xliff = unit_doc("""    <unit id="a">
      <segment>
        <target><ph/><pc equivEnd="CLOSE"/></target>
      </segment>
    </unit>
    <unit>
      <segment><target/></segment>
    </unit>
    <unit id="b">
      <segment><source/></segment>
    </unit>""")
    with pytest.raises(Xliff2LoadError) as exc:
        load_as_map(xliff)
    message = str(exc.value)
    assert message.startswith('xliff2 parse errors:\n')
    assert len(exc.value.errors) == 4
    assert len(message.split('\n')) == 5
    assert '<unit> misses the "id" attribute' in message
    assert 'Message b misses a translation' in message
    assert '<ph> misses the "equiv" attribute' in message
    assert '<pc> misses the "equivStart" attribute' in message


def test_error_location():
    xliff = unit_doc("""    <unit id="missingtarget">
      <segment>
        <source/>
      </segment>
    </unit>""")
    with pytest.raises(Xliff2LoadError) as exc:
        Xliff2().load(xliff, 'messages.fr.xlf')
    err = exc.value.errors[0]
    assert err.location.url == 'messages.fr.xlf'
    assert err.location.line == 4
    assert str(err).endswith(': messages.fr.xlf@4')


def test_malformed_document():
    with pytest.raises(Xliff2LoadError) as exc:
        Xliff2().load('<xliff version="2.0"><file>', 'broken.xlf')
    assert exc.value.errors
    assert all(err.location.url == 'broken.xlf' for err in exc.value.errors)


def test_entity_in_translation_is_reported():
    xliff = """<?xml version="1.0" encoding="UTF-8" ?>
<!DOCTYPE xliff [<!ENTITY who "world">]>
<xliff version="2.0" xmlns="urn:oasis:names:tc:xliff:document:2.0" srcLang="en">
  <file><unit id="a"><segment><target>hello &who;!</target></segment></unit></file>
</xliff>"""
    with pytest.raises(Xliff2LoadError, match='Unexpanded entity reference &who;'):
        load_as_map(xliff)


def test_non_utf8_declaration():
    xliff = """<?xml version="1.0" encoding="ISO-8859-1"?>
<xliff version="2.0" xmlns="urn:oasis:names:tc:xliff:document:2.0" srcLang="en">
  <file><unit id="a"><segment><target>café</target></segment></unit></file>
</xliff>"""
    assert load_as_map(xliff) == {'a': 'café'}


def test_foreign_namespace_placeholder():
    xliff = unit_doc("""    <unit id="a">
      <segment>
        <target>a<x:ph xmlns:x="urn:other" equiv="FOO"/></target>
      </segment>
    </unit>""")
    with pytest.raises(Xliff2LoadError, match='Unexpected tag') as exc:
        load_as_map(xliff)
    assert len(exc.value.errors) == 1
