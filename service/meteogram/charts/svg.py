"""Serializes a MeteogramRender into an SVG document."""

import xml.etree.ElementTree as ET

from service.meteogram import models

from .curves import fmt

_SVG_NS = "http://www.w3.org/2000/svg"

# Glyph outlines in a unit box centered at the origin.
_GLYPH_PATHS = {
    "droplet": (
        "M0,-0.5C0.3,-0.1,0.35,0.05,0.35,0.15"
        "A0.35,0.35,0,0,1,-0.35,0.15C-0.35,0.05,-0.3,-0.1,0,-0.5Z"
    ),
    "snowflake": "M0,-0.5L0,0.5M-0.433,-0.25L0.433,0.25M-0.433,0.25L0.433,-0.25",
    "wind-arrow": "M0,0.5L0.375,-0.5L0,-0.25L-0.375,-0.5Z",
}


def _attrs(style: models.Style) -> dict[str, str]:
    return {
        k: fmt(v) if isinstance(v, float) else str(v)
        for k, v in style.items()
        if v is not None
    }


def _element(p: models.Primitive) -> ET.Element:
    attrs = {"data-part": p.part, **_attrs(p.style)}
    if isinstance(p, models.PathPrimitive):
        return ET.Element("path", d=p.d, **attrs)
    if isinstance(p, models.RectPrimitive):
        return ET.Element(
            "rect",
            x=fmt(p.x),
            y=fmt(p.y),
            width=fmt(p.width),
            height=fmt(p.height),
            rx=fmt(p.rx),
            **attrs,
        )
    if isinstance(p, models.CirclePrimitive):
        return ET.Element("circle", cx=fmt(p.cx), cy=fmt(p.cy), r=fmt(p.r), **attrs)
    if isinstance(p, models.LinePrimitive):
        return ET.Element(
            "line", x1=fmt(p.x1), y1=fmt(p.y1), x2=fmt(p.x2), y2=fmt(p.y2), **attrs
        )
    if isinstance(p, models.TextPrimitive):
        el = ET.Element(
            "text", x=fmt(p.x), y=fmt(p.y), **{"text-anchor": p.anchor}, **attrs
        )
        el.text = p.text
        return el
    if isinstance(p, models.GlyphPrimitive):
        if p.glyph == "snowflake":
            attrs.setdefault("stroke", attrs.get("fill", "currentColor"))
            attrs["stroke-width"] = fmt(1.5 / p.size)
        transform = f"translate({fmt(p.x)},{fmt(p.y)})"
        if p.rotation:
            transform += f" rotate({fmt(p.rotation)})"
        transform += f" scale({fmt(p.size)})"
        return ET.Element("path", d=_GLYPH_PATHS[p.glyph], transform=transform, **attrs)
    raise ValueError(f"Unsupported primitive: {p.kind}")


def _defs(defs: models.ChartDefs) -> ET.Element:
    el = ET.Element("defs")
    for g in defs.gradients:
        grad = ET.SubElement(
            el,
            "linearGradient",
            id=g.id,
            x1=fmt(g.x1),
            y1=fmt(g.y1),
            x2=fmt(g.x2),
            y2=fmt(g.y2),
        )
        if g.user_space:
            grad.set("gradientUnits", "userSpaceOnUse")
        ET.SubElement(
            grad,
            "stop",
            offset="0%",
            **{"stop-color": g.from_color, "stop-opacity": fmt(g.from_opacity)},
        )
        ET.SubElement(
            grad,
            "stop",
            offset="100%",
            **{"stop-color": g.to_color, "stop-opacity": fmt(g.to_opacity)},
        )
    for m in defs.masks:
        mask = ET.SubElement(el, "mask", id=m.id)
        ET.SubElement(
            mask, "rect", x="0", y="0", width=fmt(m.width), height=fmt(m.height), fill="white"
        )
        for hole in m.holes:
            c = _element(hole)
            c.set("fill", "black")
            mask.append(c)
    return el


def to_svg(render: models.MeteogramRender) -> str:
    """Returns the SVG document of render. Layers are offset by the margin."""
    root = ET.Element(
        "svg",
        xmlns=_SVG_NS,
        width=fmt(render.width),
        height=fmt(render.height),
        viewBox=f"0 0 {fmt(render.width)} {fmt(render.height)}",
    )
    if render.suppressed_reason:
        root.set("data-suppressed", render.suppressed_reason)
        return ET.tostring(root, encoding="unicode")

    root.append(_defs(render.defs))
    offset = f"translate({fmt(render.margin.left)},{fmt(render.margin.top)})"
    for layer in render.layers:
        g = ET.SubElement(root, "g", transform=offset, **{"data-layer": layer.name})
        for p in layer.primitives:
            g.append(_element(p))
    return ET.tostring(root, encoding="unicode")
