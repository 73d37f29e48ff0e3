from semantic_checker.preprocess import is_filler, neutralized_regions, preprocess


def test_preprocess_keeps_length_and_line_breaks():
    text = (
        "<p>a</p>\n"
        "<!-- c\nx -->\n"
        "<script>var a = '<img>';\n</script>\r\n"
        "<style>p { color: red; }</style>end"
    )

    out = preprocess(text)

    assert len(out) == len(text)
    for index, char in enumerate(text):
        if char in "\r\n":
            assert out[index] == char
    assert out.startswith("<p>a</p>\n")
    assert out.endswith("end")
    assert "<img" not in out
    assert "color" not in out


def test_unterminated_comment_runs_to_end_of_text():
    text = "<p>x</p><!-- open\n<img src=a>"

    out = preprocess(text)

    assert out[:8] == "<p>x</p>"
    assert out[8:] == " " * 9 + "\n" + " " * 11


def test_regions_are_resolved_left_to_right():
    assert neutralized_regions("<!--a--><script>b</script>") == [(0, 8), (8, 26)]

    # the comment opener lives inside the script, so it is not a region of its own
    text = "<script>// <!-- \n</script><img>"
    regions = neutralized_regions(text)
    assert regions == [(0, 26)]
    assert preprocess(text).endswith("<img>")


def test_empty_and_plain_text_pass_through():
    assert preprocess("") == ""
    assert preprocess("<p>nothing to hide</p>") == "<p>nothing to hide</p>"


def test_is_filler():
    assert is_filler("")
    assert is_filler("  \n\t")
    assert not is_filler(" <p> ")


def test_abrupt_empty_comments_end_at_their_own_bracket():
    text = '<!--><img src="a.png"><!---><p>x</p><!-- c -->'

    assert neutralized_regions(text) == [(0, 5), (22, 28), (36, 46)]
    assert preprocess(text)[5:22] == '<img src="a.png">'
