"""
Small page-side helpers mounted as Streamlit components.

Both run in the app document itself, not in an iframe, and report back to
Python through component values.
"""

from __future__ import annotations

import functools

_CLIPBOARD_JS = """
const written = new Set();

export default function (component) {
  const { data, setTriggerValue } = component;
  if (!data || data.request == null || written.has(data.request)) {
    return;
  }
  written.add(data.request);

  navigator.clipboard.writeText(data.text)
    .then(() => setTriggerValue("outcome", { request: data.request, ok: true }))
    .catch((err) => {
      console.error("Failed to copy text:", err);
      setTriggerValue("outcome", { request: data.request, ok: false, error: String(err) });
    });
}
"""

_COLOR_SCHEME_JS = """
export default function (component) {
  const { setStateValue } = component;
  const query = window.matchMedia("(prefers-color-scheme: dark)");
  const report = () => setStateValue("scheme", query.matches ? "dark" : "light");

  query.addEventListener("change", report);
  report();

  return () => query.removeEventListener("change", report);
}
"""

_SCRIPTS = {
    "signconvert_clipboard": _CLIPBOARD_JS,
    "signconvert_color_scheme": _COLOR_SCHEME_JS,
}


@functools.lru_cache(maxsize=None)
def _component(name: str):
    import streamlit as st

    return st.components.v2.component(name, js=_SCRIPTS[name])


def clipboard_bridge(request: int | None, text: str | None) -> dict | None:
    """
    Ask the page to copy `text` under id `request` (None sends nothing).
    Returns the outcome the page reported on this run, if any.
    """
    mount = _component("signconvert_clipboard")
    result = mount(
        key="signconvert-clipboard",
        data={"request": request, "text": text},
        on_outcome_change=lambda: None,
    )
    return getattr(result, "outcome", None)


def color_scheme() -> str | None:
    """The platform's prefers-color-scheme, once the page has reported it."""
    mount = _component("signconvert_color_scheme")
    result = mount(key="signconvert-color-scheme", on_scheme_change=lambda: None)
    return getattr(result, "scheme", None)
