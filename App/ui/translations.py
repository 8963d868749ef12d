"""UI strings for each supported language."""

from models import Language

TRANSLATIONS: "dict[Language, dict[str, str]]" = {
    Language.EN: {
        "app_title": "PerfoMate",
        "subtitle": "Image to perforated plate",
        "upload_title": "Image",
        "upload_placeholder": "Open an image...",
        "dimensions_title": "Plate",
        "width": "Width",
        "height": "Height",
        "margin": "Margin",
        "pattern_title": "Pattern",
        "spacing": "Hole Pitch",
        "min_hole": "Min Hole",
        "max_hole": "Max Hole",
        "invert": "Invert (big holes in light areas)",
        "stats_title": "Statistics",
        "total_holes": "Total Holes",
        "open_area": "Open Area",
        "final_size": "Final Size",
        "export": "Export SVG",
        "generating": "Generating pattern...",
        "ready_title": "Ready",
        "ready_desc": "Open an image to generate a hole pattern.",
        "zoom_in": "Zoom In",
        "zoom_out": "Zoom Out",
        "fit_screen": "Fit to Screen",
        "drag_pan": "Drag to pan",
        "scroll_zoom": "Scroll to zoom",
        "switch_language": "Switch Language",
        "switch_theme": "Switch Theme",
        "load_error": "Could not open image",
        "export_done": "Saved {path}",
        "image_filter": "Images (*.png *.jpg *.jpeg *.bmp *.gif *.webp *.tif *.tiff)",
        "svg_filter": "SVG (*.svg)",
    },
    Language.ZH: {
        "app_title": "PerfoMate",
        "subtitle": "图片转冲孔板",
        "upload_title": "图片",
        "upload_placeholder": "打开图片...",
        "dimensions_title": "板材",
        "width": "宽度",
        "height": "高度",
        "margin": "边距",
        "pattern_title": "图案",
        "spacing": "孔间距",
        "min_hole": "最小孔径",
        "max_hole": "最大孔径",
        "invert": "反转（亮部大孔）",
        "stats_title": "统计",
        "total_holes": "孔总数",
        "open_area": "开孔率",
        "final_size": "成品尺寸",
        "export": "导出 SVG",
        "generating": "正在生成图案...",
        "ready_title": "准备就绪",
        "ready_desc": "打开一张图片以生成孔图案。",
        "zoom_in": "放大",
        "zoom_out": "缩小",
        "fit_screen": "适应屏幕",
        "drag_pan": "拖动平移",
        "scroll_zoom": "滚轮缩放",
        "switch_language": "切换语言",
        "switch_theme": "切换主题",
        "load_error": "无法打开图片",
        "export_done": "已保存 {path}",
        "image_filter": "图片 (*.png *.jpg *.jpeg *.bmp *.gif *.webp *.tif *.tiff)",
        "svg_filter": "SVG (*.svg)",
    },
}


def tr(language: Language, key: str, **kwargs) -> str:
    """Look up a UI string, falling back to English and then the key."""
    text = TRANSLATIONS[language].get(key) or TRANSLATIONS[Language.EN].get(key, key)
    return text.format(**kwargs) if kwargs else text


def toggle_language(language: Language) -> Language:
    return Language.ZH if language == Language.EN else Language.EN
