# JavaScript evaluated inside the render page.
# The page exposes: window.loadDesign(design), window.designReady,
# and window.__KONVA_STAGE__ (batchDraw / toDataURL).

LOAD_HOOK_READY = "() => typeof window.loadDesign === 'function'"

LOAD_DESIGN = "(design) => { window.loadDesign(design); }"

DESIGN_READY = "() => window.designReady === true"

MEDIA_POSITIONS = """
() => Array.from(document.querySelectorAll('video, audio')).map(m => m.currentTime)
"""

# Flags each stale element until its 'seeked' event fires, then moves it.
START_SEEK = """
({indices, time}) => {
    const media = Array.from(document.querySelectorAll('video, audio'));
    for (const i of indices) {
        const m = media[i];
        if (!m) continue;
        m.__exportSeeking = true;
        const onSeeked = () => {
            m.removeEventListener('seeked', onSeeked);
            m.__exportSeeking = false;
        };
        m.addEventListener('seeked', onSeeked);
        m.currentTime = time;
    }
}
"""

SEEK_SETTLED = """
() => Array.from(document.querySelectorAll('video, audio')).every(m => !m.__exportSeeking)
"""

CLEAR_SEEK_FLAGS = """
() => { for (const m of document.querySelectorAll('video, audio')) m.__exportSeeking = false; }
"""

FIRST_VIDEO_POSITION = """
() => { const v = document.querySelector('video'); return v ? v.currentTime : null; }
"""

REDRAW = """
() => { if (window.__KONVA_STAGE__) window.__KONVA_STAGE__.batchDraw(); }
"""

CAPTURE_FRAME = """
({pixelRatio}) => {
    const stage = window.__KONVA_STAGE__;
    if (!stage) return null;
    stage.batchDraw();
    return stage.toDataURL({pixelRatio: pixelRatio, mimeType: 'image/png'});
}
"""
