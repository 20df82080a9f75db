"""
Shop Titans Hero Study - Streamlit Web App
Build a hero, pick a skill pool, and rank skill loadouts with a runoff study.
"""
import logging

import pandas as pd
import streamlit as st

from shop_titans.core import EQUIPMENT_SLOT_COUNT, EMPTY, HeroConfigurationError, Quality
from shop_titans.encounters import ENCOUNTER_TIERS, StatCheckTrial
from shop_titans.game_data import GameData, load_game_data
from shop_titans.hero_builder import Hero, resolve_heroes
from shop_titans.skill_studies import single_hero_skill_variations
from shop_titans.studies import Study
from shop_titans.study_report import export_study_results_csv, study_results_to_rows
from shop_titans.streamlit_app.utils.study_chart import (
    create_runoff_funnel_chart,
    create_tier_ranking_chart,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

# Page config
st.set_page_config(
    page_title="Shop Titans Hero Study",
    page_icon="⚔️",
    layout="wide",
    initial_sidebar_state="expanded"
)

ELEMENT_GRADES = ["", "1", "2", "3", "4"]
SPIRIT_TIERS = ["T4", "T5", "T7", "T9", "TM", "T11", "T12"]


@st.cache_resource
def get_game_data() -> GameData:
    """Load the bundled game data once per process."""
    return load_game_data()


def hero_editor(game_data: GameData) -> Hero:
    """Sidebar controls for the hero being studied."""
    with st.sidebar:
        st.markdown("### Hero")
        class_name = st.selectbox("Class", sorted(game_data.hero_classes))
        hero_class = game_data.hero_classes[class_name]
        level = st.slider("Level", 1, hero_class.max_level, 1)
        hp_seeds = st.number_input("HP seeds", 0, 80, 0)
        def_seeds = st.number_input("DEF seeds", 0, 80, 0)

        equipped, quality, elements, spirits = [], [], [], []
        for slot in range(EQUIPMENT_SLOT_COUNT):
            with st.expander(f"Slot {slot + 1}: {' / '.join(hero_class.equipment_allowed[slot])}"):
                options = [EMPTY] + sorted(
                    b.name for b in game_data.blueprints.values() if hero_class.allows(slot, b.type)
                )
                equipped.append(st.selectbox("Item", options, key=f"item_{slot}"))
                quality.append(st.selectbox("Quality", [q.value for q in Quality], key=f"quality_{slot}"))
                element = st.text_input("Element", hero_class.element_type, key=f"element_{slot}")
                grade = st.selectbox("Element grade", ELEMENT_GRADES, key=f"grade_{slot}")
                elements.append(f"{element} {grade}" if element and grade else EMPTY)
                spirit = st.text_input("Spirit", "", key=f"spirit_{slot}")
                tier = st.selectbox("Spirit tier", SPIRIT_TIERS, key=f"spirit_tier_{slot}")
                spirits.append(f"{spirit} {tier}" if spirit else EMPTY)

    return Hero(
        identifier=class_name.lower(),
        hero_class=class_name,
        level=level,
        hp_seeds=int(hp_seeds),
        def_seeds=int(def_seeds),
        equipment_equipped=equipped,
        equipment_quality=quality,
        elements_socketed=elements,
        spirits_socketed=spirits,
    )


def show_resolved_hero(hero: Hero, game_data: GameData) -> bool:
    """Resolve and display the base hero. Returns False if it is invalid."""
    try:
        resolved = resolve_heroes([hero], game_data)[0].round_floats_for_display()
    except HeroConfigurationError as e:
        st.error(str(e))
        return False

    col1, col2, col3, col4, col5 = st.columns(5)
    with col1:
        st.metric("ATK", f"{resolved.atk:,.0f}")
    with col2:
        st.metric("DEF", f"{resolved.defense:,.0f}")
    with col3:
        st.metric("HP", f"{resolved.hp:,.0f}")
    with col4:
        st.metric("Crit", f"{resolved.crit_chance * 100:.0f}% x{resolved.crit_mult:.2f}")
    with col5:
        st.metric("Innate tier", resolved.innate_tier)
    return True


def main():
    """Main entry point."""
    game_data = get_game_data()
    st.title("⚔️ Shop Titans Hero Study")

    hero = hero_editor(game_data)
    if not show_resolved_hero(hero, game_data):
        st.stop()

    st.divider()
    st.markdown("### Skill Study")

    col1, col2, col3 = st.columns(3)
    with col1:
        skill_pool = st.multiselect("Skill pool", sorted(game_data.hero_skills),
                                    default=sorted(game_data.hero_skills)[:6])
    with col2:
        simulation_qty = st.number_input("Trials per variation", 1, 5000, 200)
        threshold = st.slider("Runoff threshold (%)", 1.0, 100.0, 50.0)
    with col3:
        tier_names = st.multiselect("Encounter tiers", [d.value for d in ENCOUNTER_TIERS],
                                    default=[d.value for d in ENCOUNTER_TIERS])
        seed = st.number_input("Random seed", 0, 1_000_000, 42)

    if st.button("Run study", type="primary"):
        variations = single_hero_skill_variations(hero, skill_pool, game_data=game_data)
        if not variations:
            st.warning("Pick at least 4 skills from different families")
            st.stop()

        tiers = [t for d, t in ENCOUNTER_TIERS.items() if d.value in tier_names]
        if not tiers:
            st.warning("Pick at least one encounter tier")
            st.stop()
        study = Study(
            identifier=f"{hero.identifier}_skills",
            description=f"Skill loadouts for {hero.hero_class}",
            simulation_qty=int(simulation_qty),
            runoff_scoring_threshold=float(threshold),
            game_data=game_data,
        )
        with st.spinner(f"Running {len(variations)} variations..."):
            result = study.run(variations, tiers, StatCheckTrial(seed=int(seed)))

        st.success(f"Reached {result.final_tier.name} with {len(result.survivors)} survivors")
        st.plotly_chart(create_runoff_funnel_chart(result), use_container_width=True)
        for tier_result in result.tier_results:
            st.plotly_chart(create_tier_ranking_chart(tier_result), use_container_width=True)

        df = pd.DataFrame(study_results_to_rows(result))
        st.dataframe(df, use_container_width=True, hide_index=True)
        st.download_button(
            "📥 Download results CSV",
            export_study_results_csv(result),
            file_name=f"{study.identifier}.csv",
            mime="text/csv",
        )


if __name__ == "__main__":
    main()
