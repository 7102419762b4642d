# assets.py

import os

# banner.txt may sit next to this file to override the built-in banner
ASSETS_DIR = os.path.dirname(os.path.abspath(__file__))
BANNER_PATH = os.path.join(ASSETS_DIR, 'banner.txt')

BANNER = r"""
    ██╗███╗   ██╗██╗  ██╗██╗     ██╗███╗   ██╗███████╗
    ██║████╗  ██║██║ ██╔╝██║     ██║████╗  ██║██╔════╝
    ██║██╔██╗ ██║█████╔╝ ██║     ██║██╔██╗ ██║█████╗
    ██║██║╚██╗██║██╔═██╗ ██║     ██║██║╚██╗██║██╔══╝
    ██║██║ ╚████║██║  ██╗███████╗██║██║ ╚████║███████╗
    ╚═╝╚═╝  ╚═══╝╚═╝  ╚═╝╚══════╝╚═╝╚═╝  ╚═══╝╚══════╝
          LIVE MARKDOWN FOR BLOG DRAFTS
"""


def get_banner():
    try:
        with open(BANNER_PATH, 'r', encoding='utf-8') as f:
            return f.read()
    except OSError:
        return BANNER


# Dictionary for multi-language Help
HELP_TEXT = {
    "en": """
╔══════════════════════════════════════════════════════════════════════╗
║  INKLINE │ COMMAND REFERENCE MANUAL                                  ║
╚══════════════════════════════════════════════════════════════════════╝

  ◆ NAVIGATION & INTERFACE
    ────────────────────────────────────────────────────────────────────
    [F1] or [:help]  › Toggle this Manual
    [TAB] / [S-TAB]  › Cycle focus (Title / Tags / Body)
    [Ctrl+G]         › Jump to Command Bar
    [:eng] or [:spa] › Switch Language (English/Spanish)

  ◆ WRITING & PRODUCTIVITY
    ────────────────────────────────────────────────────────────────────
    [:sprint NN]     › Start a NN minute Word Sprint
    [:restore]       › Recover content from last crash/exit
    [:new]           › Clear screen for a fresh start
    [:speed NN]      › Set reading speed (words per minute)
    [:add WORD]      › Add WORD to custom dictionary
    [Ctrl+T]         › Toggle Ghost Mode (Hide UI while writing)
    [Ctrl+D]         › Run Spellcheck / Dictionary Check

  ◆ FILES & CLIPBOARD
    ────────────────────────────────────────────────────────────────────
    [:open PATH]     › Open a markdown file (title from first # header)
    [:write]         › Save the raw markdown back (or [:write PATH])
    [Ctrl+S]         › Save to the file last opened or written
    [Ctrl+C]         › Copy selection, or the whole draft, as markdown

  ◆ FORMATTING (MARKDOWN)
    ────────────────────────────────────────────────────────────────────
    [Ctrl+B]         › **Bold**
    [Ctrl+K]         › *Italic*
    [Control+L]      › Insert List Item
    [Control+Q]      › Blockquote
    Headers          › # H1, ## H2 ... ###### H6
    Code             › `inline` and ``` fenced blocks
    Links            › [Text](url)
    Rules            › --- on its own line

    Markup hides itself on every line except the one under the cursor.

────────────────────────────────────────────────────────────────────────
 [Press F1 to Resume Writing]
""",
    "es": """
╔══════════════════════════════════════════════════════════════════════╗
║  INKLINE │ MANUAL DE REFERENCIA                                      ║
╚══════════════════════════════════════════════════════════════════════╝

  ◆ NAVEGACIÓN E INTERFAZ
    ────────────────────────────────────────────────────────────────────
    [F1] o [:help]   › Activar este manual
    [TAB] / [S-TAB]  › Cambiar foco (Título / Etiquetas / Cuerpo)
    [Ctrl+G]         › Ir a Barra de Comandos
    [:eng] o [:spa]  › Selecciona idioma (Inglés/Español)

  ◆ ESCRITURA Y PRODUCTIVIDAD
    ────────────────────────────────────────────────────────────────────
    [:sprint NN]     › Iniciar Sprint de Escritura de NN minutos
    [:restore]       › Recuperar contenido tras error/salida
    [:new]           › Limpiar pantalla (Nueva entrada)
    [:speed NN]      › Establecer velocidad de lectura (palabras por minuto)
    [:add PALABRA]   › Agregar PALABRA al diccionario personalizado
    [Ctrl+T]         › Modo Fantasma (Ocultar interfaz al escribir)
    [Ctrl+D]         › Verificar Ortografía (Diccionario)

  ◆ ARCHIVOS Y PORTAPAPELES
    ────────────────────────────────────────────────────────────────────
    [:open RUTA]     › Abrir un archivo markdown (título del primer #)
    [:write]         › Guardar el markdown (o [:write RUTA])
    [Ctrl+S]         › Guardar en el último archivo abierto o escrito
    [Ctrl+C]         › Copiar selección, o todo el borrador, en markdown

  ◆ FORMATO (MARKDOWN)
    ────────────────────────────────────────────────────────────────────
    [Ctrl+B]         › **Negrita**
    [Ctrl+K]         › *Cursiva*
    [Control+L]      › Crear Elemento de Lista
    [Control+Q]      › Citar Bloque
    Encabezados      › # T1, ## T2 ... ###### T6
    Código           › `en línea` y bloques ```
    Enlaces          › [Texto](url)
    Separadores      › --- en su propia línea

    El marcado se oculta en todas las líneas salvo la del cursor.

────────────────────────────────────────────────────────────────────────
 [Presiona F1 para volver a escribir]
"""
}

# Version info

VERSION = "0.3.0"

# Dictionary for UI labels
TRANSLATIONS = {
    "en": {
        "ui": {
            "title": "Title: ",
            "tags": "Tags: ",
            "command": "Enter Command: ",
            "new_post": "[NEW]",
            "lang_feedback": "Language: ENGLISH",
            "header": " INKLINE | LIVE MARKDOWN DRAFTING",
            "warning_prompt": "DRAFT UNSAVED! Proceed? (y/n): ",
            'sprint_start': "🚀 Sprint Started! Goal: {mins}m",
            'sprint_done': "★ DONE! +{gain} words ★",
            'empty_doc': "Empty document",
            'ready': "Ready ({lang})",
            'recovery_found': "RECOVERY FILE FOUND! Type :restore",
            'no_errors': "✅ No errors ({lang})",
            'errors_found': "❌ {count} errors: {list}...",
            'opened': "Opened {path}",
            'open_error': "Open Error: {error}",
            'saved': "Saved {path}",
            'save_error': "Save Error: {error}",
            'no_path': "No file yet. Use :write PATH",
            'copied': "Copied {count} chars of markdown",
            'busy': "Draft is being edited, try again",
            'speed_set': "Reading speed: {speed} wpm",
            'help_btn': "Help",
            'added_to_dict': "added to dictionary.",
        },
        "status": {
            "words": "Words",
            "read": "min Read",
            "done": "DONE",
        }
    },
    "es": {
        "ui": {
            "title": "Título: ",
            "tags": "Etiquetas: ",
            "command": "Introduce Comando: ",
            "new_post": "[NUEVO]",
            "lang_feedback": "Idioma: ESPAÑOL",
            "header": " INKLINE | MARKDOWN EN VIVO PARA BORRADORES",
            "warning_prompt": "¡BORRADOR SIN GUARDAR! ¿Continuar? (y/n): ",
            'sprint_start': "🚀 ¡Sprint iniciado! Meta: {mins}m",
            'sprint_done': "★ ¡LISTO! +{gain} palabras ★",
            'empty_doc': "Documento vacío",
            'ready': "Listo ({lang})",
            'recovery_found': "¡ARCHIVO DE RECUPERACIÓN! Escribe :restore",
            'no_errors': "✅ Sin errores ({lang})",
            'errors_found': "❌ {count} errores: {list}...",
            'opened': "Abierto {path}",
            'open_error': "Error al abrir: {error}",
            'saved': "Guardado {path}",
            'save_error': "Error al guardar: {error}",
            'no_path': "Sin archivo. Usa :write RUTA",
            'copied': "Copiados {count} caracteres de markdown",
            'busy': "Borrador en edición, reintenta",
            'speed_set': "Velocidad de lectura: {speed} ppm",
            'help_btn': "Ayuda",
            'added_to_dict': "añadida al diccionario.",
        },
        "status": {
            "words": "Palabras",
            "read": "Min Lectura",
            "done": "LISTO",
        }
    }
}
