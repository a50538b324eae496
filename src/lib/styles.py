"""
Style shorthand compiler and container definition parser

Turns the parameter text of a container opening line into a
ContainerDefinition.

Container parameter syntax:
    [tag.]class[#id][ extra-classes][ style-declarations]

Style declarations come in two flavours:
1. Space-separated shorthand (no semicolons anywhere):
       left:240px border:1px solid red top:90px
2. CSS-literal (any semicolon present), copied verbatim:
       left:240px; background:url(https://example.com/img.png);

The flavour is chosen once for the whole style region. Mixing the two in one
line is not detected; the semicolon wins and the text is copied as-is.

Example:
    >>> containerDefinition_parse(" aside.note#sidebar small left:10px")
    ContainerDefinition(tag='aside', class_name='note small', id='sidebar', style='left: 10px')
"""

from typing import List, Optional

from ..models.container import ContainerDefinition, StyleProperty


def styles_parseSpaceSeparated(text: str) -> str:
    """
    Compile space-separated `prop:value` groups into CSS text

    Pads every colon with spaces and splits on whitespace, then scans the
    tokens left to right. A bare ":" token is the only property boundary:
    - with no property open, the token before it names the first property
    - with a property open that has collected values, its last value token
      is taken back and becomes the next property's name

    This look-back is what lets values span several tokens
    (`border:1px solid red`) without any terminator.

    Args:
        text: Shorthand declarations, e.g. "left:240px border:1px solid red"

    Returns:
        CSS text joined as "prop: value; prop2: value2", or "" when nothing
        was captured

    Example:
        >>> styles_parseSpaceSeparated("left:240px border:1px solid red top:90px")
        'left: 240px; border: 1px solid red; top: 90px'
        >>> styles_parseSpaceSeparated("   ")
        ''
    """
    tokens = text.replace(':', ' : ').split()
    if not tokens:
        return ''

    properties: List[StyleProperty] = []
    current: Optional[StyleProperty] = None

    for index, token in enumerate(tokens):
        if token == ':':
            if current is None and index > 0:
                current = StyleProperty(name=tokens[index - 1])
            elif current is not None and current.values:
                next_name = current.values.pop()
                properties.append(current)
                current = StyleProperty(name=next_name)
        elif current is not None:
            current.values.append(token)

    # A trailing property with no value is dropped
    if current is not None and current.values:
        properties.append(current)

    return '; '.join(prop.css_render() for prop in properties)


def containerDefinition_parse(
    params: str, default_tag: str = 'div'
) -> Optional[ContainerDefinition]:
    """
    Parse the text after a container's opening marker run

    Steps:
    1. Split on whitespace. The first token containing ":" starts the style
       region; everything before it is the selector region. A colon in the
       very first token means a style without a class, which is rejected.
    2. Style region: verbatim if it contains ";" anywhere, otherwise compiled
       by styles_parseSpaceSeparated().
    3. Selector region: the first token is `[tag.]class[#id]` (id split off
       first, then tag/class on the first dot); remaining tokens are extra
       classes appended after the primary class.
    4. Reject when class, id and style are all empty.

    Args:
        params: Raw parameter text, usually with a leading space
        default_tag: Element used when the selector names no tag

    Returns:
        ContainerDefinition, or None when the line is not a valid container
        opener (the caller then declines the line)

    Example:
        >>> containerDefinition_parse(" span.highlight")
        ContainerDefinition(tag='span', class_name='highlight', id=None, style=None)
        >>> containerDefinition_parse(" left:240px") is None
        True
    """
    tokens = params.split()
    if not tokens:
        return None

    style_start = next(
        (index for index, token in enumerate(tokens) if ':' in token), None
    )

    style: Optional[str] = None
    if style_start is None:
        selector_tokens = tokens
    elif style_start == 0:
        return None
    else:
        selector_tokens = tokens[:style_start]
        raw_style = ' '.join(tokens[style_start:])
        style = raw_style if ';' in raw_style else styles_parseSpaceSeparated(raw_style)

    primary = selector_tokens[0]
    extra_classes = selector_tokens[1:]

    tag = default_tag
    class_name: Optional[str] = None
    element_id: Optional[str] = None

    hash_index = primary.find('#')
    if hash_index != -1:
        element_id = primary[hash_index + 1:]
        primary = primary[:hash_index]

    dot_index = primary.find('.')
    if dot_index != -1:
        tag = primary[:dot_index] or default_tag
        class_name = primary[dot_index + 1:]
    else:
        class_name = primary

    if extra_classes:
        joined = ' '.join(extra_classes)
        class_name = f"{class_name} {joined}" if class_name else joined

    class_name = class_name or None
    element_id = element_id or None
    style = style or None

    if class_name is None and element_id is None and style is None:
        return None

    return ContainerDefinition(
        tag=tag, class_name=class_name, id=element_id, style=style
    )
