import logging

import streamlit as st
import numpy as np
import matplotlib.pyplot as plt
import pandas as pd
import matplotlib

from sousvide import (
    VEGETABLE_DATA,
    FoodCategory,
    Geometry,
    ProcessInput,
    check_input,
    compute_heating_time,
    compute_temperature_curve,
    compute_total_time,
    get_doneness_presets,
    safety_warnings,
    temperature_at,
    trim_to_plateau,
)
from sousvide import config
from sousvide.calculator import UNREACHABLE, bath_range_for_doneness, default_bath_for_doneness
from sousvide.logging_config import setup_logging
from sousvide.units import c_to_f, f_to_c, format_temp, format_time, in_to_mm, mm_to_in

matplotlib.use('Agg')

setup_logging(config.LOG_LEVEL, config.LOG_FILE)
logger = logging.getLogger("sousvide.app")

st.set_page_config(
    page_title="Sous-Vide Calculator",
    page_icon="🥩",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .stApp {
        background-color: #0e1117;
        color: #fafafa;
    }

    .main-title {
        font-size: 2.8rem;
        text-align: center;
        color: #00c6ff !important;
        margin-bottom: 1rem;
        text-shadow: 0 2px 10px rgba(0, 198, 255, 0.3);
    }

    .result-box {
        background: linear-gradient(135deg, #1e293b 0%, #0f172a 100%);
        padding: 2rem;
        border-radius: 1rem;
        border: 2px solid #00c6ff;
        text-align: center;
        margin: 2rem 0;
        box-shadow: 0 10px 30px rgba(0, 0, 0, 0.5);
    }

    .warning-box {
        background-color: #3b2a12;
        padding: 1rem;
        border-radius: 0.5rem;
        border: 1px solid #ff9800;
        color: #ffc107;
        margin: 0.5rem 0;
    }

    h1, h2, h3, h4 {
        color: #ffffff !important;
    }
</style>
""", unsafe_allow_html=True)

# English labels for the table keys
LABELS = {
    'beef': 'Beef',
    'pork': 'Pork',
    'poultry': 'Poultry',
    'fish': 'Fish',
    'slab': 'Slab (steak, fillet)',
    'cylinder': 'Cylinder (tenderloin, sausage)',
    'sphere': 'Sphere (meatball, egg)',
    'doneness_manual': 'Manual',
    'doneness_rare': 'Rare',
    'doneness_med_rare': 'Medium rare',
    'doneness_medium': 'Medium',
    'doneness_med_well': 'Medium well',
    'doneness_well': 'Well done',
    'doneness_juicy': 'Juicy',
    'doneness_traditional': 'Traditional',
    'doneness_mi_cuit': 'Mi-cuit',
    'doneness_tender': 'Tender',
    'warning_temp_low': 'Bath below 52°C: pathogens may keep growing, keep the cook short.',
    'warning_thick': 'Thicker than 70 mm: heating takes very long, consider cutting smaller pieces.',
}


def label(key):
    return LABELS.get(key, key.replace('_', ' ').title())


def vegetable_label(key):
    return label(VEGETABLE_DATA[key].label[len('veg_'):])


def create_temperature_plot(points, temp_core, temp_bath, temp_start, unit):
    """Create core temperature curve plot"""
    to_display = c_to_f if unit == 'F' else (lambda c: c)

    times = np.array([p.time_minutes for p in points])
    temps = np.array([to_display(p.temperature_celsius) for p in points])

    fig, ax = plt.subplots(figsize=(10, 6))

    # Dark theme
    ax.set_facecolor('#1e293b')
    fig.patch.set_facecolor('#0e1117')

    danger_low, danger_high = config.DANGER_ZONE_C
    ax.axhspan(to_display(danger_low), to_display(danger_high), color='#ff3b30', alpha=0.05)
    ax.axhline(y=to_display(danger_high), color='#ffc107', linestyle='--', alpha=0.6,
               label=f'{format_temp(danger_high, unit)} Danger zone limit')
    ax.axhline(y=to_display(config.SLOW_GROWTH_C), color='#ff9800', linestyle='--', alpha=0.5,
               label=f'{format_temp(config.SLOW_GROWTH_C, unit)} Slow growth')
    ax.axhline(y=to_display(temp_core), color='#00C6FF', linestyle='--', alpha=0.8,
               label=f'Target: {format_temp(temp_core, unit)}')

    ax.plot(times, temps, color='#00C6FF', linewidth=3, label='Core temperature')

    ax.set_xlabel('Time (minutes)', color='#E2E8F0', fontsize=12)
    ax.set_ylabel(f'Temperature (°{unit})', color='#E2E8F0', fontsize=12)
    ax.set_title('Core Temperature', color='#00C6FF', fontsize=14, fontweight='bold')
    ax.grid(True, alpha=0.2, color='#64748b')
    ax.legend(facecolor='#1e293b', edgecolor='#334155', labelcolor='#E2E8F0')
    ax.tick_params(colors='#94A3B8')

    low = min(temps.min(), to_display(temp_start))
    high = max(temps.max(), to_display(temp_bath))
    ax.set_ylim(np.floor(low / 5) * 5 - 5, np.ceil(high / 5) * 5 + 5)
    ax.set_xlim(0, max(times[-1], 1))

    plt.tight_layout()
    return fig


def temperature_input(name, value_c, unit, disabled=False, min_c=config.TEMP_MIN_C, max_c=config.TEMP_MAX_C):
    """Number input in display units, returned in °C"""
    if unit == 'F':
        value = st.number_input(
            f"{name} (°F)",
            min_value=c_to_f(min_c),
            max_value=c_to_f(max_c),
            value=min(max(c_to_f(value_c), c_to_f(min_c)), c_to_f(max_c)),
            step=round(c_to_f(config.TEMP_STEP_C) - c_to_f(0), 1),
            disabled=disabled
        )
        return f_to_c(value)
    return st.number_input(
        f"{name} (°C)",
        min_value=min_c,
        max_value=max_c,
        value=float(min(max(value_c, min_c), max_c)),
        step=config.TEMP_STEP_C,
        disabled=disabled
    )


def sidebar_inputs():
    """Collect the process input from the sidebar"""
    defaults = config.DEFAULT_STATE

    with st.sidebar:
        st.markdown("### 🔧 Input Parameters")

        col1, col2 = st.columns(2)
        with col1:
            unit = st.radio("Temperature", ['C', 'F'], format_func=lambda x: f"°{x}", horizontal=True)
        with col2:
            length_unit = st.radio("Length", ['mm', 'inch'], horizontal=True)

        category = st.radio(
            "Category",
            ['meat', 'vegetables'],
            format_func=lambda x: x.title(),
            index=0 if defaults['category'] == 'meat' else 1,
            horizontal=True
        )

        st.markdown("#### 🥩 Food")
        if category == 'vegetables':
            vegetable = st.selectbox("Vegetable", options=list(VEGETABLE_DATA.keys()), format_func=vegetable_label)
            process = VEGETABLE_DATA[vegetable]
            st.selectbox("Doneness", [label('doneness_tender')], disabled=True)
            temp_start = start_temperature_input(unit)
            # Fixed recipe; geometry and temperatures come from the table
            return ProcessInput(
                category=FoodCategory.VEGETABLES,
                geometry=Geometry(defaults['shape']),
                thickness_mm=defaults['thickness'],
                temp_bath=process.temp,
                temp_start=temp_start,
                temp_core=process.temp,
                vegetable=vegetable,
            ), unit

        food_type = st.selectbox(
            "Food Type",
            options=[c.key for c in FoodCategory if c.is_meat],
            format_func=label,
            index=0
        )
        presets = get_doneness_presets(food_type)
        doneness = st.selectbox(
            "Doneness",
            options=['manual'] + [p.temp for p in presets],
            format_func=lambda x: label('doneness_manual') if x == 'manual'
            else f"{label(next(p.label for p in presets if p.temp == x))} ({format_temp(x, unit)})",
            index=1 if presets else 0
        )

        shape = st.selectbox(
            "Shape",
            options=[g.key for g in Geometry],
            format_func=label,
            index=0
        )

        st.markdown("#### 📏 Thickness / Diameter")
        if length_unit == 'inch':
            thickness = in_to_mm(st.slider(
                "Thickness (inch)",
                min_value=mm_to_in(config.THICKNESS_MIN_MM),
                max_value=mm_to_in(config.THICKNESS_MAX_MM),
                value=mm_to_in(defaults['thickness']),
                step=0.1
            ))
        else:
            thickness = st.slider(
                "Thickness (mm)",
                min_value=config.THICKNESS_MIN_MM,
                max_value=config.THICKNESS_MAX_MM,
                value=defaults['thickness'],
                step=1.0,
                help="Full thickness for a slab, diameter for a cylinder or sphere"
            )

        st.markdown("#### 🌡️ Temperatures")
        if doneness == 'manual':
            temp_core = temperature_input("Target Core", defaults['temp_core'], unit)
            temp_bath = temperature_input("Bath", defaults['temp_bath'], unit)
        else:
            temp_core = float(doneness)
            temperature_input("Target Core", temp_core, unit, disabled=True)
            min_bath, max_bath = bath_range_for_doneness(temp_core)
            temp_bath = temperature_input(
                "Bath", default_bath_for_doneness(temp_core), unit, min_c=min_bath, max_c=max_bath)

        temp_start = start_temperature_input(unit)

        st.markdown("---")
        st.markdown("*Results update automatically*")

    return ProcessInput(
        category=food_type,
        geometry=shape,
        thickness_mm=thickness,
        temp_bath=temp_bath,
        temp_start=temp_start,
        temp_core=temp_core,
    ), unit


def start_temperature_input(unit):
    choice = st.radio(
        "Starting Temperature",
        options=list(config.START_TEMPERATURES.keys()),
        format_func=lambda x: f"{x.title()} ({format_temp(config.START_TEMPERATURES[x], unit)})",
        horizontal=True
    )
    return config.START_TEMPERATURES[choice]


def show_result_box(process_input, results, unit):
    if results.total_time is None:
        color = "#ef4444"  # Red
    elif results.total_time < 120:
        color = "#10b981"  # Green
    elif results.total_time < 360:
        color = "#3B82F6"  # Blue
    else:
        color = "#f59e0b"  # Yellow

    subtitle = f"{format_time(results.total_time)} at {format_temp(process_input.temp_bath, unit)}"
    if not results.is_reachable:
        subtitle = "Target core temperature must be below the bath temperature"

    st.markdown(f"""
    <div class="result-box">
        <h2 style="color: #00C6FF; margin-bottom: 1rem;">Total Time</h2>
        <h1 style="color: {color}; font-size: 3.5rem; margin: 0;">
            {format_time(results.total_time)}
        </h1>
        <p style="color: #94A3B8; font-size: 1.2rem; margin-top: 0.5rem;">
            {subtitle}
        </p>
    </div>
    """, unsafe_allow_html=True)

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Heating", format_time(results.heating_time))
    with col2:
        st.metric("Pasteurization", format_time(results.pasteurization_time))
    with col3:
        st.metric("Core Temperature", format_temp(process_input.temp_core, unit))


def geometry_comparison(process_input):
    """Heating and total time for the other shapes"""
    rows = []
    for geometry in Geometry:
        if geometry is process_input.geometry:
            continue
        other = ProcessInput(
            category=process_input.category,
            geometry=geometry,
            thickness_mm=process_input.thickness_mm,
            temp_bath=process_input.temp_bath,
            temp_start=process_input.temp_start,
            temp_core=process_input.temp_core,
            log_reduction=process_input.log_reduction,
        )
        res = compute_total_time(other)
        rows.append((label(geometry.key), format_time(res.heating_time), format_time(res.total_time)))
    return pd.DataFrame(rows, columns=['Shape', 'Heating', 'Total'])


def main():
    st.markdown('<h1 class="main-title">🌡️ Sous-Vide Calculator</h1>', unsafe_allow_html=True)

    process_input, unit = sidebar_inputs()

    try:
        check_input(process_input)
        results = compute_total_time(process_input)
        vegetable = process_input.vegetable_process

        show_result_box(process_input, results, unit)

        if vegetable is None:
            for key in safety_warnings(process_input):
                st.markdown(f'<div class="warning-box">⚠️ {label(key)}</div>', unsafe_allow_html=True)

        # Temperature curve
        st.markdown("### 📈 Core Temperature Curve")
        if vegetable is not None:
            points = compute_temperature_curve(process_input, vegetable.time)
        elif results.is_reachable:
            points = compute_temperature_curve(process_input, results.total_time + config.CHART_EXTRA_MINUTES)
            points = trim_to_plateau(points, process_input.temp_core)
        else:
            points = []

        if points:
            fig = create_temperature_plot(
                points, process_input.temp_core, process_input.temp_bath, process_input.temp_start, unit)
            st.pyplot(fig)
            plt.close(fig)

            max_time = points[-1].time_minutes
            if max_time > 0:
                at = st.slider("Inspect time (minutes)", 0.0, float(max_time), 0.0, step=1.0)
                temp = temperature_at(points, at)
                st.caption(f"{round(at)}m: {format_temp(round(temp, 1), unit)}")

        if vegetable is None and results.is_reachable:
            st.markdown("### 🔄 Comparison with Other Shapes")
            st.dataframe(geometry_comparison(process_input), width='stretch', hide_index=True)

        with st.expander("🔍 Show Model Details"):
            category = process_input.category
            params = category.pasteurization
            col1, col2 = st.columns(2)
            with col1:
                st.markdown("**Heat Transfer**")
                st.write(f"Thermal diffusivity: {category.diffusivity:.2e} m²/s")
                st.write(f"Shape constants: c1={process_input.geometry.leading_coefficient}, "
                         f"c2={process_input.geometry.decay_rate}")
                st.write(f"Characteristic radius: {process_input.radius * 1000:.1f} mm")
                heating = compute_heating_time(process_input)
                if heating is not UNREACHABLE:
                    st.write(f"Unrounded heating time: {heating:.1f} min")
            with col2:
                st.markdown("**Pasteurization**")
                if params.d_ref == 0:
                    st.write("Not modeled for this category")
                else:
                    st.write(f"D-value: {params.d_ref} min at {params.t_ref}°C")
                    st.write(f"z-value: {params.z}°C")
                    st.write(f"Target reduction: {params.target_log} log")
            st.json({
                'heating_time': results.heating_time,
                'pasteurization_time': results.pasteurization_time,
                'total_time': results.total_time,
            })

    except ValueError as e:
        st.error(str(e))
    except Exception as e:
        logger.exception("Calculation failed")
        st.error(f"Calculation error: {str(e)}")


if __name__ == "__main__":
    main()
