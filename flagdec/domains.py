"""
flagdec/domains.py — static flag tables.

Masks mirror the proxy's ``*-t.h`` headers.  Each table is declared in
ascending bit order; sub-fields sit at the position of their lowest bit.
Bits the headers leave unused are simply absent and show up as ``EXTRA``.
"""

from __future__ import annotations

from flagdec.registry import Domain, DomainRegistry, bits, enum_field

# ===================================================================== #
#  chn->ana : channel analysers                                          #
# ===================================================================== #

CHN_ANA = Domain(
    keyword="ana",
    label="chn->ana",
    description="channel analysers (request and response)",
    entries=bits(
        # request analysers
        ("AN_REQ_FLT_START_FE", 0x00000001),
        ("AN_REQ_INSPECT_FE", 0x00000002),
        ("AN_REQ_WAIT_HTTP", 0x00000004),
        ("AN_REQ_HTTP_BODY", 0x00000008),
        ("AN_REQ_HTTP_PROCESS_FE", 0x00000010),
        ("AN_REQ_SWITCHING_RULES", 0x00000020),
        ("AN_REQ_FLT_START_BE", 0x00000040),
        ("AN_REQ_INSPECT_BE", 0x00000080),
        ("AN_REQ_HTTP_PROCESS_BE", 0x00000100),
        ("AN_REQ_HTTP_TARPIT", 0x00000200),
        ("AN_REQ_SRV_RULES", 0x00000400),
        ("AN_REQ_HTTP_INNER", 0x00000800),
        ("AN_REQ_PRST_RDP_COOKIE", 0x00001000),
        ("AN_REQ_STICKING_RULES", 0x00002000),
        ("AN_REQ_FLT_HTTP_HDRS", 0x00004000),
        ("AN_REQ_HTTP_XFER_BODY", 0x00008000),
        ("AN_REQ_WAIT_CLI", 0x00010000),
        ("AN_REQ_FLT_XFER_DATA", 0x00020000),
        ("AN_REQ_FLT_END", 0x00040000),
        # response analysers
        ("AN_RES_FLT_START_FE", 0x00080000),
        ("AN_RES_FLT_START_BE", 0x00100000),
        ("AN_RES_INSPECT", 0x00200000),
        ("AN_RES_WAIT_HTTP", 0x00400000),
        ("AN_RES_STORE_RULES", 0x00800000),
        # AN_RES_HTTP_PROCESS_BE shares this bit
        ("AN_RES_HTTP_PROCESS_FE", 0x01000000),
        ("AN_RES_FLT_HTTP_HDRS", 0x02000000),
        ("AN_RES_HTTP_XFER_BODY", 0x04000000),
        ("AN_RES_WAIT_CLI", 0x08000000),
        ("AN_RES_FLT_XFER_DATA", 0x10000000),
        ("AN_RES_FLT_END", 0x20000000),
    ),
)

# ===================================================================== #
#  chn->flags : channel flags                                            #
# ===================================================================== #

CHN_FLAGS = Domain(
    keyword="chn",
    label="chn->flags",
    description="channel flags",
    entries=bits(
        ("CF_READ_NULL", 0x00000001),
        ("CF_READ_PARTIAL", 0x00000002),
        ("CF_READ_TIMEOUT", 0x00000004),
        ("CF_READ_ERROR", 0x00000008),
        ("CF_SHUTR", 0x00000010),
        ("CF_SHUTR_NOW", 0x00000020),
        ("CF_READ_NOEXP", 0x00000040),
        ("CF_WRITE_NULL", 0x00000100),
        ("CF_WRITE_PARTIAL", 0x00000200),
        ("CF_WRITE_TIMEOUT", 0x00000400),
        ("CF_WRITE_ERROR", 0x00000800),
        ("CF_WAKE_WRITE", 0x00001000),
        ("CF_SHUTW", 0x00002000),
        ("CF_SHUTW_NOW", 0x00004000),
        ("CF_AUTO_CLOSE", 0x00008000),
        ("CF_STREAMER", 0x00010000),
        ("CF_STREAMER_FAST", 0x00020000),
        ("CF_WROTE_DATA", 0x00040000),
        ("CF_ANA_TIMEOUT", 0x00080000),
        ("CF_READ_ATTACHED", 0x00100000),
        ("CF_KERN_SPLICING", 0x00200000),
        ("CF_READ_DONTWAIT", 0x00400000),
        ("CF_AUTO_CONNECT", 0x00800000),
        ("CF_DONT_READ", 0x01000000),
        ("CF_EXPECT_MORE", 0x02000000),
        ("CF_SEND_DONTWAIT", 0x04000000),
        ("CF_NEVER_WAIT", 0x08000000),
        ("CF_WAKE_ONCE", 0x10000000),
        ("CF_FLT_ANALYZE", 0x20000000),
        ("CF_EOI", 0x40000000),
        ("CF_ISRESP", 0x80000000),
    ),
)

# ===================================================================== #
#  conn->flags : connection flags                                        #
# ===================================================================== #

CONN_FLAGS = Domain(
    keyword="conn",
    label="conn->flags",
    description="connection flags",
    entries=bits(
        ("CO_FL_SAFE_LIST", 0x00000001),
        ("CO_FL_IDLE_LIST", 0x00000002),
        # 0x04-0x20 as defined by HAProxy 2.9 connection-t.h
        ("CO_FL_REVERSED", 0x00000004),
        ("CO_FL_ACT_REVERSING", 0x00000008),
        ("CO_FL_OPT_MARK", 0x00000010),
        ("CO_FL_OPT_TOS", 0x00000020),
        ("CO_FL_CTRL_READY", 0x00000100),
        ("CO_FL_XPRT_READY", 0x00000200),
        ("CO_FL_WANT_DRAIN", 0x00000400),
        ("CO_FL_WAIT_ROOM", 0x00000800),
        ("CO_FL_EARLY_SSL_HS", 0x00004000),
        ("CO_FL_EARLY_DATA", 0x00008000),
        ("CO_FL_SOCKS4_SEND", 0x00010000),
        ("CO_FL_SOCKS4_RECV", 0x00020000),
        ("CO_FL_SOCK_RD_SH", 0x00040000),
        ("CO_FL_SOCK_WR_SH", 0x00080000),
        ("CO_FL_ERROR", 0x00100000),
        ("CO_FL_FDLESS", 0x00200000),
        ("CO_FL_WAIT_L4_CONN", 0x00400000),
        ("CO_FL_WAIT_L6_CONN", 0x00800000),
        ("CO_FL_SEND_PROXY", 0x01000000),
        ("CO_FL_ACCEPT_PROXY", 0x02000000),
        ("CO_FL_ACCEPT_CIP", 0x04000000),
        ("CO_FL_SSL_WAIT_HS", 0x08000000),
        ("CO_FL_PRIVATE", 0x10000000),
        ("CO_FL_RCVD_PROXY", 0x20000000),
        ("CO_FL_SESS_IDLE", 0x40000000),
        ("CO_FL_XPRT_TRACKED", 0x80000000),
    ),
)

# ===================================================================== #
#  sc->flags : stream connector flags                                    #
# ===================================================================== #

SC_FLAGS = Domain(
    keyword="sc",
    label="sc->flags",
    description="stream connector flags",
    entries=bits(
        ("SC_FL_ISBACK", 0x00000001),
        ("SC_FL_NOLINGER", 0x00000002),
        ("SC_FL_NOHALF", 0x00000004),
        ("SC_FL_DONT_WAKE", 0x00000008),
        ("SC_FL_INDEP_STR", 0x00000010),
        ("SC_FL_WONT_READ", 0x00000020),
        ("SC_FL_NEED_BUFF", 0x00000040),
        ("SC_FL_NEED_ROOM", 0x00000080),
    ),
)

# ===================================================================== #
#  sd->flags : stream endpoint descriptor flags                          #
# ===================================================================== #

SD_FLAGS = Domain(
    keyword="sd",
    label="sd->flags",
    description="stream endpoint descriptor flags",
    entries=bits(
        ("SE_FL_T_MUX", 0x00000001),
        ("SE_FL_T_APPLET", 0x00000002),
        ("SE_FL_DETACHED", 0x00000004),
        ("SE_FL_ORPHAN", 0x00000008),
        ("SE_FL_SHRD", 0x00000010),
        ("SE_FL_SHRR", 0x00000020),
        ("SE_FL_SHWN", 0x00000040),
        ("SE_FL_SHWS", 0x00000080),
        ("SE_FL_NOT_FIRST", 0x00000100),
        ("SE_FL_WEBSOCKET", 0x00000200),
        # set by the endpoint, read by the app layer
        ("SE_FL_EOI", 0x00001000),
        ("SE_FL_EOS", 0x00002000),
        ("SE_FL_ERROR", 0x00004000),
        ("SE_FL_ERR_PENDING", 0x00008000),
        ("SE_FL_MAY_SPLICE", 0x00010000),
        ("SE_FL_RCV_MORE", 0x00020000),
        ("SE_FL_WANT_ROOM", 0x00040000),
        # set by the app layer, read by the endpoint
        ("SE_FL_WAIT_FOR_HS", 0x00080000),
        ("SE_FL_KILL_CONN", 0x00100000),
        ("SE_FL_WAIT_DATA", 0x00200000),
        ("SE_FL_WONT_CONSUME", 0x00400000),
        ("SE_FL_HAVE_NO_DATA", 0x00800000),
        ("SE_FL_APPLET_NEED_CONN", 0x01000000),
    ),
)

# ===================================================================== #
#  strm->et : stream error types                                         #
# ===================================================================== #

STRM_ET = Domain(
    keyword="stet",
    label="strm->et",
    zero_label="STRM_ET_NONE",
    description="stream error types",
    entries=bits(
        ("STRM_ET_QUEUE_TO", 0x00000001),
        ("STRM_ET_QUEUE_ERR", 0x00000002),
        ("STRM_ET_QUEUE_ABRT", 0x00000004),
        ("STRM_ET_CONN_TO", 0x00000008),
        ("STRM_ET_CONN_ERR", 0x00000010),
        ("STRM_ET_CONN_ABRT", 0x00000020),
        ("STRM_ET_CONN_RES", 0x00000040),
        ("STRM_ET_CONN_OTHER", 0x00000080),
        ("STRM_ET_DATA_TO", 0x00000100),
        ("STRM_ET_DATA_ERR", 0x00000200),
        ("STRM_ET_DATA_ABRT", 0x00000400),
    ),
)

# ===================================================================== #
#  strm->flags : stream flags                                            #
# ===================================================================== #

# termination cause, 4 bits at 0x0000f000
SF_ERR = enum_field(
    "SF_ERR_MASK", 0x0000F000,
    ("SF_ERR_NONE", 0x00000000),
    ("SF_ERR_LOCAL", 0x00001000),
    ("SF_ERR_CLITO", 0x00002000),
    ("SF_ERR_CLICL", 0x00003000),
    ("SF_ERR_SRVTO", 0x00004000),
    ("SF_ERR_SRVCL", 0x00005000),
    ("SF_ERR_PRXCOND", 0x00006000),
    ("SF_ERR_RESOURCE", 0x00007000),
    ("SF_ERR_INTERNAL", 0x00008000),
    ("SF_ERR_DOWN", 0x00009000),
    ("SF_ERR_KILLED", 0x0000A000),
    ("SF_ERR_UP", 0x0000B000),
    ("SF_ERR_CHK_PORT", 0x0000C000),
)

# stream state at termination, 3 bits at 0x00070000
SF_FINST = enum_field(
    "SF_FINST_MASK", 0x00070000,
    ("SF_FINST_NONE", 0x00000000),
    ("SF_FINST_R", 0x00010000),
    ("SF_FINST_C", 0x00020000),
    ("SF_FINST_H", 0x00030000),
    ("SF_FINST_D", 0x00040000),
    ("SF_FINST_L", 0x00050000),
    ("SF_FINST_Q", 0x00060000),
    ("SF_FINST_T", 0x00070000),
)

STRM_FLAGS = Domain(
    keyword="strm",
    label="strm->flags",
    description="stream flags",
    entries=bits(
        ("SF_DIRECT", 0x00000001),
        ("SF_ASSIGNED", 0x00000002),
        ("SF_BE_ASSIGNED", 0x00000008),
        ("SF_FORCE_PRST", 0x00000010),
        ("SF_MONITOR", 0x00000020),
        ("SF_CURR_SESS", 0x00000040),
        ("SF_CONN_EXP", 0x00000080),
        ("SF_REDISP", 0x00000100),
        ("SF_IGNORE", 0x00000200),
        ("SF_REDIRECTABLE", 0x00000400),
        ("SF_HTX", 0x00000800),
    ) + (SF_ERR, SF_FINST) + bits(
        ("SF_IGNORE_PRST", 0x00080000),
        ("SF_SRV_REUSED", 0x00100000),
        ("SF_SRV_REUSED_ANTICIPATED", 0x00200000),
        ("SF_WEBSOCKET", 0x00400000),
        ("SF_SRC_ADDR", 0x00800000),
    ),
)

# ===================================================================== #
#  task->state : task state                                              #
# ===================================================================== #

TASK_STATE = Domain(
    keyword="task",
    label="task->state",
    zero_label="TASK_SLEEPING",
    description="task and tasklet state",
    entries=bits(
        ("TASK_RUNNING", 0x00000001),
        ("TASK_GLOBAL", 0x00000002),
        ("TASK_QUEUED", 0x00000004),
        ("TASK_SHARED_WQ", 0x00000008),
        ("TASK_SELF_WAKING", 0x00000010),
        ("TASK_KILLED", 0x00000020),
        ("TASK_IN_LIST", 0x00000040),
        ("TASK_HEAVY", 0x00000080),
        ("TASK_WOKEN_INIT", 0x00000100),
        ("TASK_WOKEN_TIMER", 0x00000200),
        ("TASK_WOKEN_IO", 0x00000400),
        ("TASK_WOKEN_SIGNAL", 0x00000800),
        ("TASK_WOKEN_MSG", 0x00001000),
        ("TASK_WOKEN_RES", 0x00002000),
        ("TASK_WOKEN_OTHER", 0x00004000),
        ("TASK_F_TASKLET", 0x00008000),
        ("TASK_F_USR1", 0x00010000),
    ),
)

# ===================================================================== #
#  txn->flags : HTTP transaction flags                                   #
# ===================================================================== #

# request cookie outcome, 3 bits at 0x000000e0
TX_CK = enum_field(
    "TX_CK_MASK", 0x000000E0,
    ("TX_CK_NONE", 0x00000000),
    ("TX_CK_INVALID", 0x00000020),
    ("TX_CK_DOWN", 0x00000040),
    ("TX_CK_VALID", 0x00000060),
    ("TX_CK_EXPIRED", 0x00000080),
    ("TX_CK_OLD", 0x000000A0),
    ("TX_CK_UNUSED", 0x000000C0),
)

# response set-cookie outcome, 3 bits at 0x00000700
TX_SCK = enum_field(
    "TX_SCK_MASK", 0x00000700,
    ("TX_SCK_NONE", 0x00000000),
    ("TX_SCK_FOUND", 0x00000100),
    ("TX_SCK_DELETED", 0x00000200),
    ("TX_SCK_INSERTED", 0x00000300),
    ("TX_SCK_REPLACED", 0x00000400),
    ("TX_SCK_UPDATED", 0x00000500),
)

TXN_FLAGS = Domain(
    keyword="txn",
    label="txn->flags",
    description="HTTP transaction flags",
    entries=bits(
        ("TX_CONST_REPLY", 0x00000008),
        ("TX_CLTARPIT", 0x00000010),
    ) + (TX_CK, TX_SCK) + bits(
        ("TX_SCK_PRESENT", 0x00000800),
        ("TX_CACHEABLE", 0x00001000),
        ("TX_CACHE_COOK", 0x00002000),
        ("TX_CACHE_IGNORE", 0x00004000),
        ("TX_CON_WANT_TUN", 0x00008000),
        ("TX_CACHE_HAS_SEC_KEY", 0x00010000),
        ("TX_USE_PX_CONN", 0x00020000),
        ("TX_NOT_FIRST", 0x00040000),
        ("TX_L7_RETRY", 0x00800000),
        ("TX_D_L7_RETRY", 0x01000000),
    ),
)

# ===================================================================== #
#  HTX start line, HTX message and HTTP message flags                    #
# ===================================================================== #

HSL_FLAGS = Domain(
    keyword="hsl",
    label="hsl->flags",
    description="HTX start-line flags",
    entries=bits(
        ("HTX_SL_F_IS_RESP", 0x00000001),
        ("HTX_SL_F_XFER_LEN", 0x00000002),
        ("HTX_SL_F_XFER_ENC", 0x00000004),
        ("HTX_SL_F_CLEN", 0x00000008),
        ("HTX_SL_F_CHNK", 0x00000010),
        ("HTX_SL_F_VER_11", 0x00000020),
        ("HTX_SL_F_BODYLESS", 0x00000040),
        ("HTX_SL_F_HAS_SCHM", 0x00000080),
        ("HTX_SL_F_SCHM_HTTP", 0x00000100),
        ("HTX_SL_F_SCHM_HTTPS", 0x00000200),
        ("HTX_SL_F_HAS_AUTHORITY", 0x00000400),
        ("HTX_SL_F_NORMALIZED_URI", 0x00000800),
        ("HTX_SL_F_CONN_UPG", 0x00001000),
    ),
)

HTX_FLAGS = Domain(
    keyword="htx",
    label="htx->flags",
    description="HTX message flags",
    entries=bits(
        ("HTX_FL_PARSING_ERROR", 0x00000001),
        ("HTX_FL_PROCESSING_ERROR", 0x00000002),
        ("HTX_FL_FRAGMENTED", 0x00000004),
        ("HTX_FL_ALTERED_PAYLOAD", 0x00000008),
        ("HTX_FL_EOM", 0x00000010),
    ),
)

HMSG_FLAGS = Domain(
    keyword="hmsg",
    label="hmsg->flags",
    description="HTTP message flags",
    entries=bits(
        ("HTTP_MSGF_CNT_LEN", 0x00000001),
        ("HTTP_MSGF_TE_CHNK", 0x00000002),
        ("HTTP_MSGF_XFER_LEN", 0x00000004),
        ("HTTP_MSGF_VER_11", 0x00000008),
        ("HTTP_MSGF_SOFT_RW", 0x00000010),
        ("HTTP_MSGF_COMPRESSING", 0x00000020),
        ("HTTP_MSGF_BODYLESS", 0x00000040),
        ("HTTP_MSGF_CONN_UPG", 0x00000080),
    ),
)


# ===================================================================== #
#  Default registry                                                      #
# ===================================================================== #

ALL_DOMAINS = (
    CHN_ANA,
    CHN_FLAGS,
    CONN_FLAGS,
    SC_FLAGS,
    SD_FLAGS,
    STRM_ET,
    STRM_FLAGS,
    TASK_STATE,
    TXN_FLAGS,
    HSL_FLAGS,
    HTX_FLAGS,
    HMSG_FLAGS,
)

REGISTRY = DomainRegistry(ALL_DOMAINS)
