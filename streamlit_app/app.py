"""PaceLink — coach workout builder.

Run with:
    streamlit run streamlit_app/app.py

Requires SUPABASE_URL and SUPABASE_ANON_KEY in the environment.
"""

from __future__ import annotations

import logging

import streamlit as st

from pacelink_client import (
    AuthExpiredError,
    PaceLinkClient,
    PaceLinkClientError,
)
from pacelink_client.auth import reset_password, sign_in, sign_out
from pacelink_engine.math.weeks import summary_totals
from pacelink_engine.models.enums import WorkoutTemplate
from pacelink_engine.models.form_state import (
    WorkoutForm,
    add_phase,
    remove_phase,
    update_form,
    update_phase,
)
from pacelink_engine.workout_builder import expand_workout

from helpers import (
    EASY_RUN_INTENSITIES,
    PHASE_INTENSITIES,
    TEMPLATE_OPTIONS,
    block_color,
    describe_block,
    format_km,
    intensity_label,
    parse_reference_pace,
    saved_workout_key,
    share_url,
    template_label,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="PaceLink",
    page_icon="🏃",
    layout="wide",
)


# ---------------------------------------------------------------------------
# Session helpers
# ---------------------------------------------------------------------------


def _get_client() -> PaceLinkClient | None:
    """One backend client per browser session (it carries the coach's auth)."""
    if "client" not in st.session_state:
        try:
            st.session_state["client"] = PaceLinkClient()
        except PaceLinkClientError as e:
            st.error(str(e))
            return None
    return st.session_state["client"]


def _get_form() -> WorkoutForm:
    return st.session_state.setdefault("form", WorkoutForm())


def _set_form(form: WorkoutForm) -> None:
    st.session_state["form"] = form


def _render_blocks(blocks) -> None:
    """Render expanded blocks as color-coded bars with their hints."""
    for block in blocks:
        hint = ""
        if block.hint_text:
            hint = f'<br><small style="color:#555;">{block.hint_text}</small>'
        st.markdown(
            f'<div style="background:{block_color(block)};padding:6px 12px;'
            f'border-radius:4px;margin:2px 0;">'
            f"<strong>{describe_block(block)}</strong>{hint}</div>",
            unsafe_allow_html=True,
        )


# ---------------------------------------------------------------------------
# Sidebar — coach session
# ---------------------------------------------------------------------------

client = _get_client()
if client is None:
    st.stop()

st.sidebar.title("Treinador")

if st.session_state.get("coach") is None:
    email = st.sidebar.text_input("E-mail")
    password = st.sidebar.text_input("Senha", type="password")
    if st.sidebar.button("Entrar", type="primary"):
        try:
            st.session_state["coach"] = sign_in(client.supabase, email, password)
            st.rerun()
        except PaceLinkClientError as e:
            st.sidebar.error(str(e))
    if st.sidebar.button("Esqueci a senha"):
        try:
            reset_password(client.supabase, email)
            st.sidebar.success("Enviamos um link de redefinição para o seu e-mail.")
        except PaceLinkClientError as e:
            st.sidebar.error(str(e))
    st.info("Entre com sua conta de treinador para montar treinos.")
    st.stop()

coach = st.session_state["coach"]
st.sidebar.success(f"Conectado: {getattr(coach, 'email', '')}")
if st.sidebar.button("Sair"):
    try:
        sign_out(client.supabase)
    except PaceLinkClientError as e:
        logger.warning("Sign-out failed: %s", e)
    for k in ("coach", "form", "last_saved"):
        st.session_state.pop(k, None)
    st.rerun()

# ---------------------------------------------------------------------------
# Student and week
# ---------------------------------------------------------------------------

st.title("PaceLink")
st.caption("Monte o treino, confira os ritmos e compartilhe o link com o aluno")

try:
    students = client.list_students(trainer_id=str(coach.id))
except AuthExpiredError:
    st.session_state.pop("coach", None)
    st.error("Sua sessão expirou. Entre novamente.")
    st.stop()
except PaceLinkClientError as e:
    st.error(f"Erro ao carregar alunos: {e}")
    st.stop()

if not students:
    st.info("Nenhum aluno cadastrado ainda.")
    st.stop()

col_student, col_week = st.columns(2)
with col_student:
    student = st.selectbox(
        "Aluno", students, format_func=lambda s: s["name"] or s["id"]
    )

week_id = None
with col_week:
    try:
        weeks = client.list_weeks(student["id"])
    except PaceLinkClientError as e:
        st.error(f"Erro ao carregar semanas: {e}")
        weeks = []
    if weeks:
        week = st.selectbox("Semana", weeks, format_func=lambda w: w["label"])
        week_id = week["id"]
    elif st.button("Criar próximas semanas"):
        try:
            client.ensure_upcoming_weeks(student)
            st.rerun()
        except PaceLinkClientError as e:
            st.error(str(e))

with st.expander("Resumo das últimas 4 semanas"):
    try:
        summary = client.get_student_week_summary(student["id"])
    except PaceLinkClientError as e:
        st.error(f"Erro ao carregar resumo: {e}")
        summary = []
    totals = summary_totals(summary)
    if totals is None:
        st.caption("Sem semanas registradas ainda.")
    else:
        t1, t2, t3, t4 = st.columns(4)
        t1.metric("Km previstos", format_km(totals.planned_km))
        t2.metric("Km realizados", format_km(totals.actual_km))
        t3.metric("Aderência", f"{totals.adherence:.0%}")
        t4.metric("RPE médio", "--" if totals.avg_rpe is None else f"{totals.avg_rpe:g}")
        st.dataframe(
            [
                {
                    "Semana": w.label,
                    "Previstos (km)": w.planned_km,
                    "Realizados (km)": w.actual_km,
                    "Concluídos": f"{w.completed}/{w.ready}",
                    "RPE": w.avg_rpe,
                }
                for w in summary
            ],
            hide_index=True,
        )

# ---------------------------------------------------------------------------
# Workout form
# ---------------------------------------------------------------------------

form = _get_form()

# Reference pace comes from the student profile unless the coach overrides it
default_p1k = student.get("p1k_sec_per_km")
p1k_text = st.text_input(
    "P1K (ritmo de referência, M:SS)",
    value=f"{int(default_p1k) // 60}:{int(default_p1k) % 60:02d}" if default_p1k else "",
    key=f"p1k_{student['id']}",
)
reference, pace_error = parse_reference_pace(p1k_text)
if pace_error:
    st.warning(pace_error)
form = update_form(form, reference_pace_sec_per_km=reference)

template = st.radio(
    "Tipo de treino",
    TEMPLATE_OPTIONS,
    index=TEMPLATE_OPTIONS.index(form.template),
    format_func=template_label,
    horizontal=True,
)
form = update_form(form, template=template)

wc1, wc2 = st.columns(2)
with wc1:
    warmup_enabled = st.toggle("Aquecimento", value=form.warmup_enabled)
    warmup_km = st.number_input(
        "Aquecimento (km)", min_value=0.1, max_value=50.0, step=0.5,
        value=float(form.warmup_km), disabled=not warmup_enabled,
    )
with wc2:
    cooldown_enabled = st.toggle("Desaquecimento", value=form.cooldown_enabled)
    cooldown_km = st.number_input(
        "Desaquecimento (km)", min_value=0.1, max_value=50.0, step=0.5,
        value=float(form.cooldown_km), disabled=not cooldown_enabled,
    )
form = update_form(
    form,
    warmup_enabled=warmup_enabled,
    warmup_km=warmup_km,
    cooldown_enabled=cooldown_enabled,
    cooldown_km=cooldown_km,
)

if template == WorkoutTemplate.EASY_RUN:
    ec1, ec2 = st.columns(2)
    main_km = ec1.number_input(
        "Distância principal (km)", min_value=0.1, max_value=200.0, step=0.5,
        value=float(form.main_distance_km),
    )
    main_intensity = ec2.selectbox(
        "Intensidade",
        EASY_RUN_INTENSITIES,
        index=EASY_RUN_INTENSITIES.index(form.main_intensity)
        if form.main_intensity in EASY_RUN_INTENSITIES else 1,
        format_func=intensity_label,
    )
    form = update_form(form, main_distance_km=main_km, main_intensity=main_intensity)

elif template == WorkoutTemplate.PROGRESSIVE:
    st.subheader("Blocos")
    for i, phase in enumerate(form.phases):
        pc1, pc2, pc3 = st.columns([3, 3, 1])
        km = pc1.number_input(
            f"Bloco {i + 1} (km)", min_value=0.1, max_value=200.0, step=0.5,
            value=float(phase.distance_km), key=f"phase_km_{i}",
        )
        intensity = pc2.selectbox(
            f"Intensidade do bloco {i + 1}",
            PHASE_INTENSITIES,
            index=PHASE_INTENSITIES.index(phase.intensity)
            if phase.intensity in PHASE_INTENSITIES else 1,
            format_func=intensity_label,
            key=f"phase_int_{i}",
        )
        form = update_phase(form, i, distance_km=km, intensity=intensity)
        if pc3.button("Remover", key=f"phase_rm_{i}"):
            _set_form(remove_phase(form, i))
            st.rerun()
    if st.button("Adicionar bloco"):
        _set_form(add_phase(form))
        st.rerun()

else:
    ac1, ac2, ac3 = st.columns(3)
    repeats = ac1.number_input(
        "Repetições", min_value=1, max_value=60, step=1, value=int(form.repeats),
    )
    strong_km = ac2.number_input(
        "Tiro (km)", min_value=0.05, max_value=10.0, step=0.05,
        value=float(form.strong_distance_km),
    )
    easy_km = ac3.number_input(
        "Recuperação (km)", min_value=0.05, max_value=10.0, step=0.05,
        value=float(form.easy_distance_km),
    )
    form = update_form(
        form, repeats=repeats, strong_distance_km=strong_km, easy_distance_km=easy_km,
    )

_set_form(form)

# ---------------------------------------------------------------------------
# Preview
# ---------------------------------------------------------------------------

draft = expand_workout(form)

st.divider()
m1, m2, m3 = st.columns(3)
m1.metric("Total", format_km(draft.total_km))
m2.metric("Blocos", str(len(draft.blocks)))
m3.metric("Título", draft.share_title)
if reference is None:
    st.caption("Sem P1K: os blocos ficam sem faixa de ritmo.")
_render_blocks(draft.blocks)

# ---------------------------------------------------------------------------
# Save / share
# ---------------------------------------------------------------------------

st.divider()
# Saved workouts are tracked per student and week so switching the selection
# never updates another student's workout
saved_workouts = st.session_state.setdefault("last_saved", {})
saved_key = saved_workout_key(student["id"], week_id)
last = saved_workouts.get(saved_key)
workout_id = last.id if last is not None else None

sc1, sc2 = st.columns(2)
with sc1:
    if st.button("Salvar rascunho"):
        try:
            with st.spinner("Salvando..."):
                saved = client.save_draft(form, student["id"], workout_id, week_id)
            saved_workouts[saved_key] = saved
            st.success("Rascunho salvo.")
        except AuthExpiredError:
            st.error("Sua sessão expirou. Entre novamente.")
            st.session_state.pop("coach", None)
        except PaceLinkClientError as e:
            st.error(f"Erro ao salvar: {e}")
with sc2:
    if st.button("Compartilhar", type="primary"):
        try:
            with st.spinner("Publicando..."):
                saved = client.share_workout(form, student["id"], workout_id, week_id)
            saved_workouts[saved_key] = saved
            st.success("Treino publicado.")
        except AuthExpiredError:
            st.error("Sua sessão expirou. Entre novamente.")
            st.session_state.pop("coach", None)
        except PaceLinkClientError as e:
            st.error(f"Erro ao compartilhar: {e}")

last = saved_workouts.get(saved_key)
if last is not None and last.share_slug:
    st.code(share_url(last.share_slug), language=None)
