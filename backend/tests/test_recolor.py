from iconserver.services.recolor import apply_color_to_svg, recolor_svg_bytes

SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">'
    '<defs><linearGradient id="g">'
    '<stop offset="0" style="stop-color:#FF0000"/>'
    '<stop offset="1" style="stop-color : #0f0"/>'
    "</linearGradient></defs>"
    '<path fill="#abc" d="M0 0h24v24H0z"/>'
    '<circle FILL="#A1B2C3" r="4"/>'
    '<rect style="fill : #00ff00;stroke:#000000" width="2"/>'
    '<rect fill="none" stroke="#123"/>'
    "</svg>"
)


def test_all_three_forms_are_replaced():
    out = apply_color_to_svg(SVG, "#123456")

    assert 'fill="#123456" d=' in out
    assert '<circle fill="#123456" r="4"/>' in out
    assert 'style="fill:#123456;stroke:#000000"' in out
    assert 'style="stop-color:#123456"' in out
    assert out.count("stop-color:#123456") == 2
    assert "#abc" not in out
    assert "#A1B2C3" not in out


def test_non_matching_content_is_untouched():
    out = apply_color_to_svg(SVG, "#123456")

    assert '<rect fill="none" stroke="#123"/>' in out
    assert "stroke:#000000" in out
    assert out.startswith('<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">')


def test_only_three_or_six_digit_hex_matches():
    svg = '<a fill="#abcd"/><b style="fill:#12345678"/><c style="fill:#1234"/>'
    assert apply_color_to_svg(svg, "#000") == svg


def test_recolor_is_idempotent():
    once = apply_color_to_svg(SVG, "#123456")
    assert apply_color_to_svg(once, "#123456") == once


def test_no_patterns_is_a_noop():
    svg = '<svg><path d="M0 0"/></svg>'
    assert apply_color_to_svg(svg, "#fff") == svg


def test_lexical_match_inside_unrelated_text():
    svg = "<svg><desc>fill:#fff</desc></svg>"
    assert apply_color_to_svg(svg, "#000") == "<svg><desc>fill:#000</desc></svg>"


def test_color_with_backslash_is_inserted_literally():
    assert apply_color_to_svg('<p fill="#fff"/>', "#\\1") == '<p fill="#\\1"/>'


def test_bytes_outside_matches_survive():
    body = b'<svg><!-- \xff\xfe --><path fill="#fff"/></svg>'
    out = recolor_svg_bytes(body, "#010203")
    assert out == b'<svg><!-- \xff\xfe --><path fill="#010203"/></svg>'
