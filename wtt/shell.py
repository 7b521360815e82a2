"""Shell integration snippets printed by `wtt-bin --init <shell>`.

The wrapper function runs wtt-bin with diagnostics on the terminal and
changes into the directory printed on stdout, if any.
"""

from wtt.constants import SUPPORTED_SHELLS
from wtt.exceptions import UnsupportedShellError

ZSH_INIT = r"""
# wtt shell wrapper: "wtt create/list/<branch>" change directory
wtt() {
  local output
  output=$(command wtt-bin "$@" 2>/dev/tty)
  local exit_code=$?
  if [ $exit_code -ne 0 ]; then
    return $exit_code
  fi
  if [ -d "$output" ]; then
    cd "$output" || return 1
  elif [ -n "$output" ]; then
    echo "$output"
  fi
}

# Prompt integration: show the active repo in the right prompt.
prompt_wtt() {
  local ctx
  ctx=$(command wtt-bin context 2>/dev/null) || return
  [[ -z "$ctx" ]] && return
  p10k segment -f cyan -t "$ctx"
}
instant_prompt_wtt() { prompt_wtt; }

_wtt_precmd() {
  local ctx
  ctx=$(command wtt-bin context 2>/dev/null)
  _WTT_PS1="${ctx:+%F{cyan}${ctx}%f}"
}

# Runs once on the first prompt, after plugins have loaded.
_wtt_setup() {
  precmd_functions=("${(@)precmd_functions:#_wtt_setup}")

  if typeset -f p10k > /dev/null 2>&1; then
    if [[ ${POWERLEVEL9K_RIGHT_PROMPT_ELEMENTS[(r)wtt]} != wtt ]]; then
      POWERLEVEL9K_RIGHT_PROMPT_ELEMENTS+=(wtt)
      typeset -g POWERLEVEL9K_RIGHT_PROMPT_ELEMENTS
      p10k reload 2>/dev/null
    fi
    return
  fi

  precmd_functions+=(_wtt_precmd)
  _wtt_precmd
  setopt prompt_subst
  if [[ -n "$RPROMPT" ]]; then
    RPROMPT='${_WTT_PS1}${_WTT_PS1:+ }'"$RPROMPT"
  else
    RPROMPT='${_WTT_PS1}'
  fi
}

precmd_functions+=(_wtt_setup)
"""

BASH_INIT = r"""
# wtt shell wrapper: "wtt create/list/<branch>" change directory
wtt() {
  local output
  output=$(command wtt-bin "$@" 2>/dev/tty)
  local exit_code=$?
  if [ $exit_code -ne 0 ]; then
    return $exit_code
  fi
  if [ -d "$output" ]; then
    cd "$output" || return 1
  elif [ -n "$output" ]; then
    echo "$output"
  fi
}

# Prompt integration: prefix PS1 with the active repo.
_wtt_update_ps1() {
  local ctx
  ctx=$(command wtt-bin context 2>/dev/null)
  if [[ -n "$ctx" ]]; then
    _WTT_PS1="\[\e[36m\]${ctx}\[\e[0m\] "
  else
    _WTT_PS1=""
  fi
}

PROMPT_COMMAND="_wtt_update_ps1${PROMPT_COMMAND:+;$PROMPT_COMMAND}"
PS1='${_WTT_PS1}'"$PS1"
"""

FISH_INIT = r"""
# wtt shell wrapper: "wtt create/list/<branch>" change directory
function wtt
  set output (command wtt-bin $argv 2>/dev/tty)
  set exit_code $status
  if test $exit_code -ne 0
    return $exit_code
  end
  if test -d "$output"
    cd "$output"
  else if test -n "$output"
    echo "$output"
  end
end

# Prompt integration. Themes that define their own fish_right_prompt
# can call wtt_segment from it.
function wtt_segment
  set ctx (command wtt-bin context 2>/dev/null)
  if test -n "$ctx"
    set_color cyan
    printf '%s ' $ctx
    set_color normal
  end
end

if not functions -q fish_right_prompt
  function fish_right_prompt
    wtt_segment
  end
end
"""

_SNIPPETS = {
    "zsh": ZSH_INIT,
    "bash": BASH_INIT,
    "fish": FISH_INIT,
}


def init_script(shell: str) -> str:
    """Return the integration snippet for shell.

    Raises:
        UnsupportedShellError: For shells other than zsh, bash and fish
    """
    try:
        return _SNIPPETS[shell]
    except KeyError:
        raise UnsupportedShellError(shell, SUPPORTED_SHELLS) from None
