import html
import logging

import streamlit as st
from streamlit_webrtc import webrtc_streamer, WebRtcMode, RTCConfiguration

from signconvert.browser import color_scheme
from signconvert.camera import Environment
from signconvert.clipboard import BrowserClipboard
from signconvert.config import ConverterConfig
from signconvert.controller import ConverterController
from signconvert.webrtc import FrameGrabber, WebRtcDevices

cfg = ConverterConfig.from_env()
logging.basicConfig(level=cfg.log_level, format=cfg.log_format)

st.set_page_config(page_title = "Sign Language Converter", layout = "wide")

# Session state
if "controller" not in st.session_state:
    devices = WebRtcDevices(timeout = cfg.acquire_timeout)
    controller = ConverterController(cfg, devices, BrowserClipboard(), frame_source = devices.latest_frame)
    devices.on_ended = controller.camera.ended
    st.session_state.devices = devices
    st.session_state.controller = controller

ctl: ConverterController = st.session_state.controller
devices: WebRtcDevices = st.session_state.devices
ctl.initialize(Environment.from_headers(st.context.headers))

# WebRTC networking config so our connection is stable
RTC_CONFIGURATION = RTCConfiguration({"iceServers": cfg.ice_servers})


def render_header(theme):
    st.markdown(theme.css(), unsafe_allow_html = True)
    title_col, toggle_col = st.columns([12, 1])
    with title_col:
        st.title("Sign Language Converter")
        st.markdown(
            '<p class="signconvert-muted">Convert sign language to text or speech in real-time</p>',
            unsafe_allow_html = True,
        )
    with toggle_col:
        st.button(theme.toggle_label, key = "theme", help = theme.toggle_help, on_click = ctl.toggle_dark_mode)


@st.fragment(run_every = 1.0)
def watch_acquisition():
    if devices.expire():
        st.rerun()


def render_camera():
    with st.container(border = True):
        # Browser capture; frames only pass through FrameGrabber
        ctx = webrtc_streamer(
            key = "sign-converter",
            mode = WebRtcMode.SENDRECV,
            rtc_configuration = RTC_CONFIGURATION,
            video_processor_factory = FrameGrabber,
            media_stream_constraints = cfg.media_stream_constraints(),
            desired_playing_state = ctl.camera.wants_device,
            async_processing = True,
        )
        devices.sync(ctx)

        if ctl.camera.is_pending:
            st.info("Waiting for camera permission...")
            watch_acquisition()
        elif not ctl.is_streaming:
            st.button("📷 Start Camera", key = "start", on_click = ctl.start_camera)

        if ctl.error:
            st.error(ctl.error, icon = "⚠️")

        text_col, speech_col = st.columns(2)
        with text_col:
            st.button(
                "Convert to Text",
                key = "to-text",
                type = "primary",
                disabled = not ctl.can_convert,
                on_click = ctl.convert_to_text,
                width = "stretch",
            )
        with speech_col:
            if st.button(
                "Convert to Speech",
                key = "to-speech",
                disabled = not ctl.can_convert,
                width = "stretch",
            ):
                audio = ctl.convert_to_speech()
                if audio:
                    st.audio(audio, format = "audio/mp3", autoplay = True)

        if ctl.is_streaming:
            st.button("Stop Camera", key = "stop", on_click = ctl.stop_camera)


@st.fragment(run_every = 0.5)
def expire_copy_mark():
    if ctl.log.copied_id is None:
        st.rerun()


def render_conversions():
    with st.container(border = True):
        # Settles a pending copy before the marks are drawn
        ctl.clipboard.render()

        title_col, clear_col = st.columns([6, 1])
        with title_col:
            st.subheader("Conversions")
        if len(ctl.log):
            with clear_col:
                st.button("🗑️", key = "clear", help = "Clear all conversions", on_click = ctl.clear_conversions)

        if not len(ctl.log):
            st.markdown(
                '<div style="text-align:center">'
                "<p>No conversions yet</p>"
                '<p class="signconvert-muted">Start converting to see the results here</p>'
                "</div>",
                unsafe_allow_html = True,
            )

        for record in ctl.log:
            text_col, copy_col = st.columns([6, 1])
            with text_col:
                st.markdown(
                    f'<div class="signconvert-record"><p>{html.escape(record.text)}</p>'
                    f'<p class="signconvert-muted">{record.timestamp}</p></div>',
                    unsafe_allow_html = True,
                )
            with copy_col:
                st.button(
                    "✅" if ctl.log.is_copied(record.id) else "📋",
                    key = f"copy-{record.id}",
                    help = "Copy text",
                    on_click = ctl.copy,
                    args = (record,),
                )


# Page-reported preference first, Streamlit's guess until it arrives
ctl.follow_color_scheme(color_scheme() or st.context.theme.type)

render_header(ctl.theme)
camera_col, log_col = st.columns([2, 1], gap = "large")
with camera_col:
    render_camera()
with log_col:
    render_conversions()

# Only ticks while a record shows the copied mark
if ctl.log.copied_id is not None:
    expire_copy_mark()
