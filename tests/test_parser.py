from NoteConvert import html_parser
from NoteConvert.formats import MAX_NESTING
from NoteConvert.html_lexer import tokenize
from NoteConvert.inline_parser import parse_inline_html
from NoteConvert.model import (
    Blockquote,
    Bold,
    BulletList,
    Code,
    CodeBlock,
    Document,
    HardBreak,
    Heading,
    HorizontalRule,
    Image,
    Italic,
    Link,
    ListItem,
    OrderedList,
    Paragraph,
    Strike,
    TaskItem,
    TaskList,
    Text,
)


def test_parse_paragraph_with_bold():
    document = html_parser.parse_html("<p>Hello <strong>world</strong></p>")
    assert document == Document(
        blocks=(Paragraph(inline=(Text("Hello "), Text("world", (Bold(),)))),)
    )


def test_parse_empty_and_blank_input():
    assert html_parser.parse_html("") == Document()
    assert html_parser.parse_html("  \n ") == Document()


def test_malformed_input_becomes_single_paragraph():
    document = html_parser.parse_html("not even html")
    assert document.blocks == (Paragraph(inline=(Text("not even html"),)),)


def test_fallback_keeps_inline_marks():
    document = html_parser.parse_html("just <em>inline</em> &amp; text")
    assert document.blocks == (
        Paragraph(inline=(Text("just "), Text("inline", (Italic(),)), Text(" & text"))),
    )


def test_parse_code_block_verbatim():
    document = html_parser.parse_html("<pre><code>const a = 1;</code></pre>")
    assert document.blocks == (CodeBlock(language=None, text="const a = 1;"),)


def test_code_block_keeps_tags_as_text_and_reads_language():
    markup = '<pre><code class="language-html">&lt;b&gt;x&lt;/b&gt; <b>y</b></code></pre>'
    block = html_parser.parse_html(markup).blocks[0]
    assert isinstance(block, CodeBlock)
    assert block.language == "html"
    assert block.text == "<b>x</b> <b>y</b>"


def test_parse_headings_blockquote_and_rule():
    markup = "<h1>Title</h1><h3>Sub</h3><blockquote><p>quoted</p><blockquote><p>deeper</p></blockquote></blockquote><hr>"
    blocks = html_parser.parse_html(markup).blocks
    assert blocks[0] == Heading(level=1, inline=(Text("Title"),))
    assert blocks[1] == Heading(level=3, inline=(Text("Sub"),))
    assert blocks[2] == Blockquote(
        blocks=(
            Paragraph(inline=(Text("quoted"),)),
            Blockquote(blocks=(Paragraph(inline=(Text("deeper"),)),)),
        )
    )
    assert isinstance(blocks[3], HorizontalRule)


def test_heading_drops_wrapping_paragraph():
    blocks = html_parser.parse_html("<h2><p>Wrapped</p></h2>").blocks
    assert blocks == (Heading(level=2, inline=(Text("Wrapped"),)),)


def test_parse_lists():
    markup = "<ul><li>a</li><li>b</li></ul><ol><li><p>one</p></li><li>two</li></ol>"
    blocks = html_parser.parse_html(markup).blocks
    assert blocks[0] == BulletList(
        items=(ListItem(blocks=(Paragraph(inline=(Text("a"),)),)), ListItem(blocks=(Paragraph(inline=(Text("b"),)),)))
    )
    assert isinstance(blocks[1], OrderedList)
    assert [item.blocks for item in blocks[1].items] == [
        (Paragraph(inline=(Text("one"),)),),
        (Paragraph(inline=(Text("two"),)),),
    ]


def test_nested_list_inside_item():
    markup = "<ul>\n<li>parent\n<ul>\n<li>child</li>\n</ul>\n</li>\n</ul>"
    (outer,) = html_parser.parse_html(markup).blocks
    assert isinstance(outer, BulletList)
    (item,) = outer.items
    assert item.blocks[0] == Paragraph(inline=(Text("parent"),))
    assert item.blocks[1] == BulletList(items=(ListItem(blocks=(Paragraph(inline=(Text("child"),)),)),))


def test_mixed_list_becomes_task_list():
    markup = '<ul><li><input type="checkbox" checked> first</li><li>second</li></ul>'
    (block,) = html_parser.parse_html(markup).blocks
    assert block == TaskList(
        items=(
            TaskItem(checked=True, blocks=(Paragraph(inline=(Text("first"),)),)),
            TaskItem(checked=False, blocks=(Paragraph(inline=(Text("second"),)),)),
        )
    )


def test_editor_task_items_with_data_attributes():
    markup = (
        '<ul data-type="taskList">'
        '<li data-checked="true" data-type="taskItem"><label><input type="checkbox" checked="checked"><span></span></label>'
        "<div><p>Ship it</p></div></li>"
        '<li data-checked="false" data-type="taskItem"><label><input type="checkbox"><span></span></label>'
        "<div><p>Later</p></div></li>"
        "</ul>"
    )
    (block,) = html_parser.parse_html(markup).blocks
    assert isinstance(block, TaskList)
    assert [item.checked for item in block.items] == [True, False]
    assert block.items[0].blocks == (Paragraph(inline=(Text("Ship it"),)),)


def test_image_block_and_image_inside_paragraph():
    markup = '<img src="a.png" alt="A"><p>before <img src="b.png" alt="B"> after</p><img alt="no source">'
    blocks = html_parser.parse_html(markup).blocks
    assert blocks == (
        Image(src="a.png", alt="A"),
        Paragraph(inline=(Text("before"),)),
        Image(src="b.png", alt="B"),
        Paragraph(inline=(Text("after"),)),
    )


def test_text_between_blocks_is_kept():
    blocks = html_parser.parse_html("<p>one</p>\n loose <b>text</b> \n<p>two</p>").blocks
    assert blocks[1] == Paragraph(inline=(Text("loose "), Text("text", (Bold(),))))
    assert len(blocks) == 3


def test_unknown_elements_are_transparent():
    blocks = html_parser.parse_html('<div class="x"><p>in <span style="c">div</span></p><table><tr><td>cell</td></tr></table></div>').blocks
    assert blocks == (Paragraph(inline=(Text("in div"),)), Paragraph(inline=(Text("cell"),)))


def test_unclosed_and_stray_tags_do_not_fail():
    blocks = html_parser.parse_html("<p>open <strong>bold</p></em><ul><li>x").blocks
    assert blocks[0] == Paragraph(inline=(Text("open "), Text("bold", (Bold(),))))
    assert blocks[1] == BulletList(items=(ListItem(blocks=(Paragraph(inline=(Text("x"),)),)),))


def test_entities_decode_once_and_only_known_ones():
    (block,) = html_parser.parse_html("<p>&amp;lt; &lt;tag&gt; &quot;q&quot; &#39;s&#39; a&nbsp;b &copy; &#169;</p>").blocks
    assert block.inline == (Text("&lt; <tag> \"q\" 's' a b &copy; &#169;"),)


def test_inline_nesting_orders_marks_inner_first():
    nodes = parse_inline_html('<em>a <strong>b <a href="/x">c</a></strong></em>')
    assert nodes == [
        Text("a ", (Italic(),)),
        Text("b ", (Bold(), Italic())),
        Text("c", (Link(href="/x"), Bold(), Italic())),
    ]


def test_nested_identical_marks_collapse():
    nodes = parse_inline_html("<b>x<strong>y</strong>z</b>")
    assert nodes == [Text("xyz", (Bold(),))]


def test_inline_aliases_breaks_and_unmarked_tags():
    nodes = parse_inline_html("<i>i</i><del>d</del><code>c</code>line<br>next <mark>hi</mark> <u>under</u>")
    assert nodes == [
        Text("i", (Italic(),)),
        Text("d", (Strike(),)),
        Text("c", (Code(),)),
        Text("line"),
        HardBreak(),
        Text("next hi under"),
    ]


def test_misnested_inline_tags_close_at_ancestor():
    nodes = parse_inline_html("<em><strong>a</em>b</strong>")
    assert nodes == [Text("a", (Bold(), Italic())), Text("b")]


def test_less_than_sign_outside_tag_is_text():
    (block,) = html_parser.parse_html("<p>1 < 2 and 3 > 2</p>").blocks
    assert block.inline == (Text("1 < 2 and 3 > 2"),)


def test_attributes_without_separating_whitespace():
    (tag,) = tokenize('<a href="/x"title=\'t\'>')
    assert tag.attrs == {"href": "/x", "title": "t"}
    (block,) = html_parser.parse_html('<p><a href="/x"title="t">go</a></p>').blocks
    assert block.inline == (Text("go", (Link(href="/x"),)),)


def test_deep_block_nesting_flattens_past_the_limit():
    markup = "<blockquote>" * 1000 + "<p>x &amp; <b>y</b></p>" + "</blockquote>" * 1000 + "<p>after</p>"
    document = html_parser.parse_html(markup)
    node, depth = document.blocks[0], 0
    while isinstance(node, Blockquote):
        depth += 1
        (node,) = node.blocks
    assert depth == MAX_NESTING
    assert node == Paragraph(inline=(Text("x & y"),))
    assert document.blocks[1:] == (Paragraph(inline=(Text("after"),)),)


def test_deep_list_nesting_does_not_fail():
    document = html_parser.parse_html("<ul><li>" * 1000 + "x" + "</li></ul>" * 1000 + "<p>after</p>")
    node, depth = document.blocks[0], 0
    while isinstance(node, (BulletList, ListItem)):
        depth += 1
        (node,) = node.items if isinstance(node, BulletList) else node.blocks
    assert depth == MAX_NESTING
    assert node == Paragraph(inline=(Text("x"),))
    assert document.blocks[1:] == (Paragraph(inline=(Text("after"),)),)


def test_deep_inline_nesting_keeps_text():
    markup = "<p>" + "<b><i>" * 600 + "x" + "</i></b>" * 600 + "</p>"
    assert html_parser.parse_html(markup).blocks == (Paragraph(inline=(Text("x", (Italic(), Bold())),)),)
