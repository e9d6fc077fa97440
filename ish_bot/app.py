# ISH Bot chat frontend
# Run with: streamlit run ish_bot/app.py

import asyncio

import streamlit as st

from ish_bot.client import ChatController, RelayClient, SessionRegistry, SUPPORTED_LANGUAGES
from ish_bot.models import Origin

st.set_page_config(
    page_title="ISH Health Assistant",
    layout="centered",
    initial_sidebar_state="expanded"
)

# Initialize session state
if "controller" not in st.session_state:
    registry = SessionRegistry()
    registry.create_session()
    st.session_state.controller = ChatController(registry, RelayClient())

controller: ChatController = st.session_state.controller
registry = controller.registry

st.markdown("<h1 style='text-align: center;'>ISH Health Assistant</h1>", unsafe_allow_html=True)

with st.sidebar:
    codes = list(SUPPORTED_LANGUAGES)
    language = st.selectbox(
        "Language",
        codes,
        index=codes.index(registry.language) if registry.language in codes else 0,
        format_func=lambda code: SUPPORTED_LANGUAGES[code]
    )
    if language != registry.language:
        registry.select_language(language)

    if st.button("New chat", use_container_width=True):
        registry.create_session()
        st.rerun()

    st.markdown("---")
    for session in registry.sessions:
        active = session.id == registry.active_session.id
        if st.button(session.title, key=session.id, disabled=active, use_container_width=True):
            registry.select_session(session.id)
            st.rerun()

active_session = registry.active_session

for message in active_session.messages:
    with st.chat_message("user" if message.origin == Origin.USER else "assistant"):
        st.markdown(message.content)

if prompt := st.chat_input("Ask a health question..."):
    with st.chat_message("user"):
        st.markdown(prompt)
    with st.spinner("ISH is typing..."):
        asyncio.run(controller.send(prompt))
    st.rerun()
