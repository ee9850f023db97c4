#
# Copyright (c) 2026, the kalens contributors
# All rights reserved.
# 
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#     * Redistributions of source code must retain the above copyright
#       notice, this list of conditions and the following disclaimer.
#     * Redistributions in binary form must reproduce the above copyright
#       notice, this list of conditions and the following disclaimer in the
#       documentation and/or other materials provided with the distribution.
#     * Neither the name of Nick Blundell nor the
#       names of its contributors may be used to endorse or promote products
#       derived from this software without specific prior written permission.
# 
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND
# ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED
# WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
# DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER BE LIABLE FOR ANY
# DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES
# (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES;
# LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND
# ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT
# (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS
# SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
#
# Description:
#   Lens for keepalived.conf, the configuration file of the keepalived
#   VRRP and load-balancing daemon.  For example:
#
#     vrrp_instance VI_1 {
#       state MASTER
#       interface eth0
#       virtual_ipaddress {
#         192.168.200.16/24 dev eth0
#       }
#     }
#
#   becomes the tree:
#
#     vrrp_instance = VI_1
#       state = MASTER
#       interface = eth0
#       virtual_ipaddress
#         ipaddr = 192.168.200.16
#           prefixlen = 24
#           dev = eth0
#

from .debug import *
from .base_lenses import *
from .util_lenses import *
from .structure_lenses import *

#
# Values.
#

NUMBER = r"[0-9]+"
SIGNED = r"-?[0-9]+"
IPADDR = r"[0-9A-Fa-f.:]+"
EMAIL = r"[A-Za-z0-9_+.-]+@[A-Za-z0-9_.-]+"
# A bare token, which may hold characters a WORD may not (e.g. a password).
TOKEN = r"[^ \t\n#!{}\"]+"
# A quoted string (e.g. a script with arguments) or a bare token.
STRING = r"\"[^\"\n]*\"|[^ \t\n#!{}\"]+"

sto_word = Store(WORD)
sto_number = Store(NUMBER)
sto_signed = Store(SIGNED)
sto_ipaddr = Store(IPADDR)
sto_email = Store(EMAIL)
sto_token = Store(TOKEN)
sto_string = Store(STRING)

#
# Addresses and routes.
#

prefixlen = Subtree(Label("prefixlen") + "/" + Store(NUMBER))

ipaddr_option = Subtree(Key(keyword("dev|brd|broadcast|scope|label")) + sep + sto_token)

# e.g. "192.168.200.16/24 dev eth0 scope global"
ipaddr = Subtree(
  indent + Label("ipaddr") + sto_ipaddr + Optional(prefixlen)
    + ZeroOrMore(sep + ipaddr_option)
    + comment_or_eol
)

route_src = Subtree(Key(keyword("src")) + sep + sto_ipaddr + Optional(prefixlen))
route_to = Subtree(Key(keyword("to")) + sep + sto_ipaddr + Optional(prefixlen))
route_option = Subtree(Key(keyword("via|gw|dev|scope|table|metric")) + sep + sto_token)

# e.g. "src 192.168.100.1 to 192.168.109.0/24 via 192.168.200.254 dev eth1"
route = Subtree(
  indent + Label("route") + Optional(route_src + sep) + route_to
    + ZeroOrMore(sep + route_option)
    + comment_or_eol
)

email = Subtree(indent + Label("email") + sto_email + comment_or_eol)

notify = field("notify_master|notify_backup|notify_fault|notify_stop|notify", sto_string)

#
# Global definitions.
#

global_defs = block("global_defs",
    block("notification_email", email)
  | field("notification_email_from", sto_email)
  | field("smtp_server", sto_word)
  | field("smtp_connect_timeout", sto_number)
  | field("lvs_id|router_id", sto_word)
  | field("vrrp_mcast_group4|vrrp_mcast_group6", sto_ipaddr)
  | flag("enable_traps|vrrp_strict|vrrp_skip_check_adv_addr|enable_script_security")
)

static_ipaddress = block("static_ipaddress", ipaddr)
static_routes = block("static_routes", route)

global_conf = global_defs | static_ipaddress | static_routes

#
# VRRP.
#

vrrp_sync_group = named_block("vrrp_sync_group",
    block("group", flag(WORD))
  | notify
  | flag("smtp_alert")
)

authentication = block("authentication",
    field("auth_type", Store(keyword("PASS|AH")))
  | field("auth_pass", sto_token)
)

vrrp_instance = named_block("vrrp_instance",
    field("state", Store(keyword("MASTER|BACKUP")))
  | field("interface|lvs_sync_daemon_interface", sto_word)
  | field("virtual_router_id|priority|advert_int|garp_master_delay", sto_number)
  | field("mcast_src_ip|unicast_src_ip", sto_ipaddr)
  | flag("smtp_alert|nopreempt|dont_track_primary|use_vmac")
  | notify
  | authentication
  | block("virtual_ipaddress|virtual_ipaddress_excluded", ipaddr)
  | block("virtual_routes", route)
  | block("track_interface|track_script", flag(WORD))
  | block("unicast_peer", flag(IPADDR))
)

vrrp_script = named_block("vrrp_script",
    field("script", sto_string)
  | field("interval|timeout|fall|rise", sto_number)
  | field("weight", sto_signed)
)

vrrpd_conf = vrrp_sync_group | vrrp_instance | vrrp_script

#
# Load balancing (LVS).
#

check_field = field("connect_timeout|connect_port|nb_get_retry|delay_before_retry", sto_number)

url = block("url",
    field("path", sto_string)
  | field("digest", sto_word)
  | field("status_code", sto_number)
)

tcp_check = block("TCP_CHECK", check_field)
http_check = block("HTTP_GET|SSL_GET", check_field | url)
misc_check = block("MISC_CHECK",
    field("misc_path", sto_string)
  | field("misc_timeout", sto_number)
  | flag("misc_dynamic")
)

real_server = named_block_arg("real_server", "ip", "port",
    field("weight", sto_number)
  | flag("inhibit_on_failure")
  | field("notify_up|notify_down", sto_string)
  | tcp_check
  | http_check
  | misc_check
)

virtual_server = named_block_arg("virtual_server", "ip", "port",
    field("delay_loop|persistence_timeout", sto_number)
  | field("lb_algo|lb_kind|protocol|virtualhost", sto_word)
  | field("nat_mask|persistence_granularity", sto_ipaddr)
  | flag("ha_suspend")
  | real_server
)

lvs_conf = virtual_server

#
# The whole file.
#

conf_entry = blank_line | comment_line | global_conf | vrrpd_conf | lvs_conf

lns = ZeroOrMore(conf_entry, line_end="\n")

auto_name_lenses(globals())
