"""Main Streamlit entrypoint for Mangaluru Mitra."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

# Ensure project root is on path when running: streamlit run mitra/routes/app.py
_root = Path(__file__).resolve().parents[2]
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

import streamlit as st

from mitra.config import configure_logging, get_settings, load_env
from mitra.config.settings import BOT_NAME, SUGGESTIONS
from mitra.services.conversation_engine import ConversationSession
from mitra.services.factory import Services, build_services
from mitra.services.favorites import AuthenticationRequired
from mitra.services.models import USER, CardResponse, ConversationMessage
from mitra.store.base import StoreError

SERVICES_KEY = "services"
SESSION_KEY = "conversation_session"
SESSION_USER_KEY = "conversation_user"
PENDING_KEY = "pending_message"


def _current_user_id(auth_enabled: bool) -> Optional[str]:
    user = getattr(st, "user", None)
    if not auth_enabled or user is None or not user.get("is_logged_in"):
        return None
    return user.get("sub") or user.get("email")


def _init_services(settings) -> Services:
    if SERVICES_KEY not in st.session_state:
        st.session_state[SERVICES_KEY] = build_services(settings)
    return st.session_state[SERVICES_KEY]


def _init_session(services: Services, user_id: Optional[str]) -> ConversationSession:
    session: Optional[ConversationSession] = st.session_state.get(SESSION_KEY)
    if session is None:
        session = services.new_session(user_id)
        st.session_state[SESSION_KEY] = session
        st.session_state[SESSION_USER_KEY] = user_id
    elif st.session_state.get(SESSION_USER_KEY) != user_id:
        session.attach_user(user_id)
        st.session_state[SESSION_USER_KEY] = user_id
    return session


def _render_message(message: ConversationMessage, index: int, services: Services, user_id: Optional[str]) -> None:
    response = message.response
    with st.chat_message("user" if message.sender == USER else "assistant"):
        if response.type == "card":
            st.markdown(f"### {response.title}\n\n{response.content}")
            if response.note:
                st.caption(f'"{response.note}"')
            if response.weather:
                st.metric("Current Weather", f"{response.weather.temperature_celsius}°C", response.weather.description)
            if user_id and st.button("Save to favorites", key=f"fav_save_{index}"):
                services.favorites.save_favorite(user_id, response)
                st.toast(f"Saved {response.title}")
        elif response.type == "phrase_list":
            st.markdown(f"**{response.title}**")
            for p in response.phrases:
                st.markdown(f'"{p.target}" ({p.source}) - *{p.pronunciation}*')
        elif response.type == "food_tour":
            st.markdown(f"**{response.title}**")
            for stop in response.stops:
                st.markdown(f"- **{stop.meal}: {stop.name}** at {stop.restaurant}")
            st.link_button("View Tour on Map", response.map_url)
        elif response.type == "event_list":
            st.markdown(f"**{response.title}**")
            for event in response.events:
                st.markdown(
                    f"**{event.name}**\n\n{event.description}\n\n"
                    f"**When:** {event.date} | **Where:** {event.location}"
                )
        elif response.type == "favorite_list":
            st.markdown(f"**{response.title}**")
            if not response.favorites:
                st.caption("Nothing saved yet.")
            for fav in response.favorites:
                st.markdown(f"**{fav.title}**\n\n{fav.content}")
                if user_id and st.button("Remove", key=f"fav_remove_{index}_{fav.id}"):
                    services.favorites.remove_favorite(user_id, fav.id)
                    st.toast(f"Removed {fav.title}")
        else:
            st.markdown(response.content)


def main() -> None:
    load_env()
    settings = get_settings()
    configure_logging(settings.log_level)

    st.set_page_config(page_title=BOT_NAME, page_icon="🗺️")
    st.title(f"{BOT_NAME} 🗺️")
    st.caption("Your Interactive Local Guide")

    user_id = _current_user_id(settings.auth_enabled)
    if settings.auth_enabled:
        if user_id:
            if st.sidebar.button("Log out"):
                st.logout()
        elif st.sidebar.button("Log in with Google"):
            st.login()

    services = _init_services(settings)
    try:
        session = _init_session(services, user_id)
    except StoreError as e:
        st.error(f"Could not load your conversation: {e}")
        return

    if st.sidebar.button("Clear chat", type="secondary"):
        try:
            session.clear()
        except StoreError as e:
            st.error(f"Could not clear history: {e}")
        st.rerun()

    for index, message in enumerate(session.messages):
        try:
            _render_message(message, index, services, user_id)
        except (AuthenticationRequired, StoreError) as e:
            st.error(str(e))

    if session.is_fresh:
        cols = st.columns(len(SUGGESTIONS))
        for col, suggestion in zip(cols, SUGGESTIONS):
            if col.button(suggestion, key=f"chip_{suggestion}"):
                st.session_state[PENDING_KEY] = suggestion
                st.rerun()

    typed = st.chat_input("Ask about Chicken Ghee Roast...", disabled=not session.can_send)
    pending = st.session_state.pop(PENDING_KEY, None) or typed
    if pending and session.can_send:
        with st.spinner(f"{BOT_NAME} is thinking..."):
            session.send(pending)
        st.rerun()


if __name__ == "__main__":
    main()
